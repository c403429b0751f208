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


from collections.abc import Sequence

from gitscalpel.core.data.diff_hunk import DiffHunk
from gitscalpel.core.data.pick_group import LineRange
from gitscalpel.core.diff.hunk_id import IdentifiedHunk
from gitscalpel.core.exceptions import ValidationError, hunk_not_found
from gitscalpel.core.patch.slicer import slice_hunk


def unique(items) -> list:
    seen = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen


def resolve_hunks(
    identified: Sequence[IdentifiedHunk], ids: Sequence[str], where: str
) -> list[IdentifiedHunk]:
    """Look every id up before anything is applied; the first miss fails all."""
    by_id = {item.hunk_id: item for item in identified}
    resolved = []
    for hunk_id in unique(ids):
        if hunk_id not in by_id:
            raise hunk_not_found(hunk_id, where)
        resolved.append(by_id[hunk_id])
    return resolved


def validate_ranges(hunk_id: str, hunk: DiffHunk, ranges: Sequence[LineRange]) -> None:
    for start, end in ranges:
        if start > len(hunk.lines):
            raise ValidationError(
                f"line range {start}-{end} is outside hunk {hunk_id}",
                f"The hunk has {len(hunk.lines)} lines; see 'gitscalpel show {hunk_id}'.",
            )


def select_ranges(
    item: IdentifiedHunk, ranges: Sequence[LineRange], reverse: bool
) -> DiffHunk:
    """Slice one hunk to ``ranges``, refusing selections without changes."""
    validate_ranges(item.hunk_id, item.hunk, ranges)
    sliced = slice_hunk(item.hunk, ranges, reverse=reverse)
    if not sliced.has_changes:
        raise ValidationError(f"selection of hunk {item.hunk_id} selects no changes")
    return sliced
