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


from loguru import logger

from gitscalpel.context import CommitContext, GlobalContext
from gitscalpel.core.commands.git_commands import ApplyMode, DiffSource
from gitscalpel.core.data.pick_group import ranges_by_hunk
from gitscalpel.core.exceptions import (
    CommitFailedError,
    PatchApplyError,
    PreconditionError,
)
from gitscalpel.core.patch.slicer import combine_patches

from .hunk_selection import resolve_hunks, select_ranges


class CommitPipeline:
    """Stage the chosen hunks (or parts of them) and commit them in one step."""

    def __init__(self, global_context: GlobalContext, commit_context: CommitContext):
        self.global_context = global_context
        self.commit_context = commit_context

    def run(self) -> list[str]:
        git_commands = self.global_context.git_commands

        if git_commands.has_staged_changes():
            raise PreconditionError(
                "the index already has staged changes",
                "Commit or unstage them first so unrelated work is not mixed in.",
            )

        source = DiffSource()
        identified = git_commands.get_identified_hunks(source)
        merged = ranges_by_hunk(self.commit_context.picks)
        selected = resolve_hunks(identified, list(merged), source.describe())

        hunks = []
        for item in selected:
            ranges = merged[item.hunk_id]
            hunks.append(
                item.hunk if ranges is None else select_ranges(item, ranges, False)
            )

        patch = combine_patches(hunks)
        git_commands.apply_patch(patch, ApplyMode.STAGE)
        try:
            git_commands.commit(self.commit_context.message)
        except CommitFailedError:
            logger.debug("Commit failed, restoring the index")
            try:
                git_commands.apply_patch(patch, ApplyMode.UNSTAGE)
            except PatchApplyError as e:
                logger.error(
                    f"Could not restore the index, check 'git status': {e.details}"
                )
            raise

        return [item.hunk_id for item in selected]
