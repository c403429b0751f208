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
Cutting hunks down to a subset of their changed lines.

Two selection modes exist. Range slicing serves stage/unstage/discard/undo and
commit, where the direction decides what an unselected line turns into. Mask
slicing serves split, where one hunk is handed out over several commits and
the already-applied mask describes what the index currently holds.
"""

from collections.abc import Sequence

from ..data.diff_hunk import NULL_DEVICE, DiffHunk, DiffLine, LineKind, count_sides
from ..exceptions import UnsupportedHunkError

LineRange = tuple[int, int]


def _in_ranges(index: int, ranges: Sequence[LineRange]) -> bool:
    position = index + 1
    return any(start <= position <= end for start, end in ranges)


def _ensure_fragmentable(hunk: DiffHunk) -> None:
    if not hunk.is_fragmentable:
        tags = ", ".join(sorted(hunk.unsupported_metadata))
        raise UnsupportedHunkError(
            f"cannot select lines of a hunk in {hunk.display_file} ({tags})",
            "Apply or revert the whole hunk instead.",
        )


def _collect(hunk: DiffHunk, decide) -> list[DiffLine]:
    """
    Build the new body. ``decide(index, line)`` returns the line to keep, or
    None to drop it. A "\\ No newline" marker follows the fate of the line it
    annotates.
    """
    result: list[DiffLine] = []
    previous_dropped = False
    for index, line in enumerate(hunk.lines):
        if line.is_marker:
            if not previous_dropped:
                result.append(line)
            continue
        kept = decide(index, line)
        previous_dropped = kept is None
        if kept is not None:
            result.append(kept)
    return result


def _file_header_for(hunk: DiffHunk, lines: Sequence[DiffLine]) -> str:
    """
    Keep the original file header unless a side pinned to the null device is
    no longer empty, in which case that side has to name the real file.
    """
    old_count, new_count = count_sides(lines)
    header_lines = hunk.file_header.split("\n")
    changed = False
    for i, header_line in enumerate(header_lines):
        if header_line == f"--- {NULL_DEVICE}" and old_count > 0:
            header_lines[i] = f"--- a/{hunk.new_file}"
            changed = True
        elif header_line == f"+++ {NULL_DEVICE}" and new_count > 0:
            header_lines[i] = f"+++ b/{hunk.old_file}"
            changed = True
    return "\n".join(header_lines) if changed else hunk.file_header


def _rebuild(hunk: DiffHunk, lines: list[DiffLine]) -> DiffHunk:
    return hunk.with_lines(lines, file_header=_file_header_for(hunk, lines))


def slice_hunk(
    hunk: DiffHunk, ranges: Sequence[LineRange], reverse: bool = False
) -> DiffHunk:
    """
    Keep only the changes on the 1-based inclusive ``ranges``.

    Forward (apply to index): unselected additions are dropped and unselected
    deletions become context. Reverse (undo from index or tree): unselected
    additions become context and unselected deletions are dropped.
    """
    _ensure_fragmentable(hunk)

    def decide(index: int, line: DiffLine) -> DiffLine | None:
        if not line.is_change or _in_ranges(index, ranges):
            return line
        if line.kind is LineKind.ADDITION:
            return line.as_context() if reverse else None
        return None if reverse else line.as_context()

    return _rebuild(hunk, _collect(hunk, decide))


def slice_hunk_masked(
    hunk: DiffHunk, already_applied: Sequence[bool], wanted: Sequence[bool]
) -> DiffHunk:
    """
    Select lines by mask against an index that already holds ``already_applied``.

    An addition applied earlier is context now; a deletion applied earlier is
    gone from the index and is dropped. Lines neither applied nor wanted keep
    their pre-change form: absent for additions, context for deletions.
    """
    _ensure_fragmentable(hunk)
    if len(already_applied) != len(hunk.lines) or len(wanted) != len(hunk.lines):
        raise ValueError("selection masks must cover every hunk line")

    def decide(index: int, line: DiffLine) -> DiffLine | None:
        if line.kind is LineKind.ADDITION:
            if already_applied[index]:
                return line.as_context()
            return line if wanted[index] else None
        if line.kind is LineKind.DELETION:
            if already_applied[index]:
                return None
            return line if wanted[index] else line.as_context()
        return line

    return _rebuild(hunk, _collect(hunk, decide))


def build_patch(hunk: DiffHunk) -> str:
    """Standalone patch text for one hunk, every line newline terminated."""
    head = [part for part in (hunk.file_header, hunk.header) if part]
    return "".join(f"{part}\n" for part in head + hunk.raw_lines)


def combine_patches(hunks) -> str:
    """Concatenate hunks into one patch for a single apply call."""
    return "".join(build_patch(hunk) for hunk in hunks)
