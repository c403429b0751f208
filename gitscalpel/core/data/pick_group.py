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


from dataclasses import dataclass, field

LineRange = tuple[int, int]


@dataclass(frozen=True)
class HunkPick:
    """A hunk id, optionally narrowed to one 1-based inclusive line range."""

    hunk_id: str
    line_range: LineRange | None = None

    def describe(self) -> str:
        if self.line_range is None:
            return self.hunk_id
        start, end = self.line_range
        return f"{self.hunk_id}:{start}" if start == end else f"{self.hunk_id}:{start}-{end}"


@dataclass
class PickGroup:
    """Partial or whole hunks that become one commit of a split."""

    picks: list[HunkPick] = field(default_factory=list)
    message_parts: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return join_message(self.message_parts)

    @property
    def hunk_ids(self) -> list[str]:
        seen = []
        for pick in self.picks:
            if pick.hunk_id not in seen:
                seen.append(pick.hunk_id)
        return seen


def join_message(parts) -> str:
    # multiple -m values become paragraphs, as with git commit
    return "\n\n".join(parts)


def ranges_by_hunk(picks) -> dict[str, list[LineRange] | None]:
    """
    Merge picks into one entry per hunk id, in first-seen order.

    ``None`` means the whole hunk; a whole-hunk pick absorbs any ranges given
    for the same id.
    """
    merged: dict[str, list[LineRange] | None] = {}
    for pick in picks:
        if pick.line_range is None:
            merged[pick.hunk_id] = None
        elif pick.hunk_id not in merged:
            merged[pick.hunk_id] = [pick.line_range]
        elif merged[pick.hunk_id] is not None:
            merged[pick.hunk_id].append(pick.line_range)
    return merged
