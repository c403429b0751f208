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

from .diff_hunk import DiffHunk


@dataclass
class HunkState:
    """
    One hunk of a commit being split, plus which of its lines are already
    committed by earlier groups. Lives for a single split run.
    """

    hunk_id: str
    hunk: DiffHunk
    applied: list[bool] = field(default_factory=list)

    def __post_init__(self):
        if not self.applied:
            self.applied = [False] * len(self.hunk.lines)

    def copy(self) -> "HunkState":
        return HunkState(self.hunk_id, self.hunk, list(self.applied))

    @property
    def change_indices(self) -> list[int]:
        return [i for i, line in enumerate(self.hunk.lines) if line.is_change]

    def pending_mask(self) -> list[bool]:
        """Every changed line not yet committed."""
        mask = [False] * len(self.hunk.lines)
        for i in self.change_indices:
            mask[i] = not self.applied[i]
        return mask

    def range_mask(self, ranges) -> list[bool]:
        """Changed lines inside the 1-based inclusive ``ranges``."""
        mask = [False] * len(self.hunk.lines)
        for i in self.change_indices:
            position = i + 1
            mask[i] = any(start <= position <= end for start, end in ranges)
        return mask

    def mark_applied(self, mask) -> None:
        for i, wanted in enumerate(mask):
            if wanted:
                self.applied[i] = True
