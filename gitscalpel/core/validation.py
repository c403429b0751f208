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
Input validation for command arguments.

Everything here runs before any repository mutation, so a bad argument can
never leave a command half done.
"""

import re

from .data.pick_group import HunkPick, LineRange, PickGroup
from .exceptions import PreconditionError, ValidationError

_HUNK_ID_RE = re.compile(r"^[0-9a-f]{7}(-\d+)?$")


def validate_git_repository(git_commands) -> None:
    """Raise a GitError unless the context points into a work tree."""
    git_commands.ensure_git_repo()


def validate_hunk_id(hunk_id: str) -> str:
    hunk_id = hunk_id.strip()
    if not _HUNK_ID_RE.match(hunk_id):
        raise ValidationError(
            f"invalid hunk id: {hunk_id!r}",
            "Hunk ids are 7 hex characters, optionally followed by -N.",
        )
    return hunk_id


def parse_line_range(text: str) -> LineRange:
    """Parse ``N`` or ``A-B`` into a 1-based inclusive range."""
    text = text.strip()
    start_text, sep, end_text = text.partition("-")
    try:
        start = int(start_text)
        end = int(end_text) if sep else start
    except ValueError:
        raise ValidationError(
            f"invalid line range: {text!r}", "Use N or A-B, e.g. 3 or 2-5."
        ) from None

    if start < 1 or end < 1:
        raise ValidationError(f"invalid line range: {text!r}", "Lines are 1-based.")
    if start > end:
        raise ValidationError(
            f"invalid line range: {text!r}", "The start must not exceed the end."
        )
    return start, end


def parse_pick_id(text: str) -> list[HunkPick]:
    """
    Parse ``ID`` or ``ID:R1,R2,...`` into picks.

    ``ID:`` with nothing after the colon selects the whole hunk.
    """
    hunk_id, _, range_text = text.partition(":")
    hunk_id = validate_hunk_id(hunk_id)
    if not range_text.strip():
        return [HunkPick(hunk_id)]
    return [
        HunkPick(hunk_id, parse_line_range(part)) for part in range_text.split(",")
    ]


def validate_ids(ids: list[str] | None) -> list[str]:
    if not ids:
        raise ValidationError("at least one hunk id is required")
    return [validate_hunk_id(hunk_id) for hunk_id in ids]


def validate_lines_option(ids: list[str], lines: str | None) -> LineRange | None:
    if lines is None:
        return None
    if len(ids) != 1:
        raise ValidationError("--lines can only be used with a single hunk id")
    return parse_line_range(lines)


def validate_messages(messages: list[str] | None) -> list[str]:
    if not messages or not any(m.strip() for m in messages):
        raise ValidationError("a commit message is required (-m/--message)")
    return messages


def _is_flag(arg: str) -> bool:
    return arg.startswith("-") and len(arg) > 1


def parse_split_args(args: list[str]) -> tuple[list[PickGroup], list[str]]:
    """
    Parse the trailing split arguments into pick groups and rest message parts.

    ``--pick`` collects ids until the next flag; ``-m/--message`` adds a
    message part to the current group; ``--pick`` after messages starts a new
    group; ``--rest-message`` closes the groups and may repeat.
    """
    groups: list[PickGroup] = []
    rest_parts: list[str] = []
    current: PickGroup | None = None
    after_rest = False

    def flush():
        nonlocal current
        if current is None:
            return
        if not current.message_parts:
            raise ValidationError("--pick group missing --message")
        groups.append(current)
        current = None

    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--pick":
            if after_rest:
                raise ValidationError("--pick not allowed after --rest-message")
            if current is not None and current.message_parts:
                flush()
            if current is None:
                current = PickGroup()
            i += 1
            picked = 0
            while i < len(args) and not _is_flag(args[i]):
                current.picks.extend(parse_pick_id(args[i]))
                picked += 1
                i += 1
            if picked == 0:
                raise ValidationError("--pick requires at least one hunk id")
            continue

        if arg in ("-m", "--message"):
            if after_rest:
                raise ValidationError(f"{arg} not allowed after --rest-message")
            if current is None:
                raise ValidationError(f"{arg} must follow --pick")
            if i + 1 >= len(args):
                raise ValidationError(f"{arg} requires a value")
            current.message_parts.append(args[i + 1])
            i += 2
            continue

        if arg == "--rest-message":
            if i + 1 >= len(args):
                raise ValidationError("--rest-message requires a value")
            flush()
            after_rest = True
            rest_parts.append(args[i + 1])
            i += 2
            continue

        raise ValidationError(f"unexpected argument: {arg}")

    flush()
    if not groups:
        raise ValidationError("at least one --pick ... --message pair is required")
    return groups, rest_parts


def validate_no_rebase_in_progress(git_commands) -> None:
    if git_commands.rebase_in_progress():
        raise PreconditionError(
            "a rebase is already in progress",
            "Finish it with 'git rebase --continue' or drop it with 'git rebase --abort'.",
        )


def validate_on_current_branch(git_commands, target: str, head: str, ref: str) -> None:
    """Only commits reachable from HEAD can be rewritten in place."""
    if target != head and not git_commands.is_ancestor(target, head):
        raise PreconditionError(
            f"{ref} is not an ancestor of HEAD",
            "Check out the branch that contains it first.",
        )


def validate_clean_working_tree(git_commands) -> None:
    if git_commands.has_tracked_changes():
        raise PreconditionError(
            "working tree is dirty; commit or stash your changes first",
            "Untracked files are fine, modified or staged tracked files are not.",
        )
