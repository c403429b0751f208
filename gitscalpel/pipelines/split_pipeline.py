# -----------------------------------------------------------------------------
# gitscalpel - Dual Licensed Software
# Copyright (c) 2025 Adem Can
#
# This file is part of gitscalpel.
#
# gitscalpel is available under a dual-license:
#   1. AGPLv3 (Affero General Public License v3)
#      - See LICENSE.txt and LICENSE-AGPL.txt
#      - Online: https://www.gnu.org/licenses/agpl-3.0.html
#
#   2. Commercial License
#      - For proprietary or revenue-generating use,
#        including SaaS, embedding in closed-source software,
#        or avoiding AGPL obligations.
#      - See LICENSE.txt and COMMERCIAL-LICENSE.txt
#      - Contact: ademfcan@gmail.com
#
# By using this file, you agree to the terms of one of the two licenses above.
# -----------------------------------------------------------------------------


"""
Splitting one commit into several.

The commit is un-committed into the working tree (pausing a rebase at it when
it is not the tip), then each pick group is staged from the original hunks by
mask and committed in turn. Line numbers always refer to the hunks as they
were in the original commit, so ids and ranges from one ``hunks --commit``
listing stay valid for every group. The rest commit takes the target's own
tree, so the last commit of a split always matches the original.
"""

from dataclasses import dataclass

from loguru import logger

from gitscalpel.context import GlobalContext, SplitContext
from gitscalpel.core.commands.git_commands import ApplyMode, DiffSource
from gitscalpel.core.data.hunk_state import HunkState
from gitscalpel.core.data.pick_group import PickGroup, ranges_by_hunk
from gitscalpel.core.exceptions import (
    PreconditionError,
    UnsupportedHunkError,
    ValidationError,
)
from gitscalpel.core.patch.slicer import combine_patches, slice_hunk_masked
from gitscalpel.core.rewrite.outcome import RebaseOutcome
from gitscalpel.core.rewrite.sequence_editor import edit_command
from gitscalpel.core.validation import (
    validate_clean_working_tree,
    validate_no_rebase_in_progress,
    validate_on_current_branch,
)

from .hunk_selection import resolve_hunks, validate_ranges


@dataclass
class PlannedCommit:
    message: str
    # (hunk id, wanted mask) per hunk touched by this commit
    selections: list[tuple[str, list[bool]]]


@dataclass
class SplitResult:
    outcome: RebaseOutcome
    messages: list[str]


class SplitPipeline:
    def __init__(self, global_context: GlobalContext, split_context: SplitContext):
        self.global_context = global_context
        self.split_context = split_context

    def _group_masks(
        self, group: PickGroup, states: dict[str, HunkState]
    ) -> list[tuple[str, list[bool]]]:
        selections = []
        for hunk_id, ranges in ranges_by_hunk(group.picks).items():
            state = states[hunk_id]
            if ranges is None:
                mask = state.pending_mask()
            else:
                validate_ranges(hunk_id, state.hunk, ranges)
                mask = state.range_mask(ranges)
                taken = [i + 1 for i, w in enumerate(mask) if w and state.applied[i]]
                if taken:
                    lines = ", ".join(str(n) for n in taken)
                    raise ValidationError(
                        f"line(s) {lines} of hunk {hunk_id} were already picked by an earlier group"
                    )
            if any(mask):
                selections.append((hunk_id, mask))

        if not selections:
            picked = " ".join(pick.describe() for pick in group.picks)
            raise ValidationError(f"--pick {picked} selects no changes")
        return selections

    def _plan(self, states: dict[str, HunkState]) -> list[PlannedCommit]:
        """Compute every group's masks against simulated state, before mutating."""
        simulated = {hunk_id: state.copy() for hunk_id, state in states.items()}
        plan = []
        for group in self.split_context.groups:
            selections = self._group_masks(group, simulated)
            for hunk_id, mask in selections:
                simulated[hunk_id].mark_applied(mask)
            plan.append(PlannedCommit(group.message, selections))
        return plan

    def _load_states(self, sha: str) -> dict[str, HunkState]:
        git_commands = self.global_context.git_commands
        identified = git_commands.get_identified_hunks(DiffSource(commit=sha))

        requested = [
            pick.hunk_id for group in self.split_context.groups for pick in group.picks
        ]
        for item in resolve_hunks(
            identified, requested, f"commit {self.split_context.target}"
        ):
            if not item.hunk.is_fragmentable:
                tags = ", ".join(sorted(item.hunk.unsupported_metadata))
                raise UnsupportedHunkError(
                    f"hunk {item.hunk_id} cannot be split ({tags})",
                    "Renames, copies, mode changes and binary files cannot be picked; "
                    "they always land in the rest commit.",
                )

        return {item.hunk_id: HunkState(item.hunk_id, item.hunk) for item in identified}

    def _commit_selection(
        self, states: dict[str, HunkState], selections, message: str
    ) -> None:
        git_commands = self.global_context.git_commands
        hunks = [
            slice_hunk_masked(states[hunk_id].hunk, states[hunk_id].applied, mask)
            for hunk_id, mask in selections
        ]
        git_commands.apply_patch(combine_patches(hunks), ApplyMode.STAGE)
        git_commands.commit(message)
        for hunk_id, mask in selections:
            states[hunk_id].mark_applied(mask)

    def run(self) -> SplitResult:
        git_commands = self.global_context.git_commands

        validate_clean_working_tree(git_commands)
        validate_no_rebase_in_progress(git_commands)

        target = git_commands.resolve_commit(self.split_context.target)
        head = git_commands.head_sha()
        validate_on_current_branch(git_commands, target, head, self.split_context.target)
        parent = git_commands.parent_of(target)
        if parent is None:
            raise PreconditionError("cannot split the root commit")

        states = self._load_states(target)
        plan = self._plan(states)
        original_message = git_commands.commit_message(target)

        rebasing = target != head
        if rebasing:
            outcome = git_commands.rebase(parent, sequence_editor=edit_command(target))
            if not outcome.ok:
                return SplitResult(outcome, [])
            logger.debug(f"Rebase paused at {target}")

        git_commands.reset("HEAD~1")

        messages = []
        for planned in plan:
            self._commit_selection(states, planned.selections, planned.message)
            messages.append(planned.message)
            subject = planned.message.partition("\n")[0]
            logger.debug(f"Committed split part: {subject}")

        # whatever no group took, including renames, mode changes and binary
        # files, is committed from the target's own tree
        git_commands.read_tree(target)
        if git_commands.has_staged_changes():
            rest_message = self.split_context.rest_message or original_message
            git_commands.commit(rest_message)
            messages.append(rest_message)

        outcome = RebaseOutcome.success()
        if rebasing:
            outcome = git_commands.rebase_continue()
        return SplitResult(outcome, messages)
