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


import hashlib
from typing import NamedTuple

from ..data.diff_hunk import DiffHunk

HUNK_ID_LENGTH = 7


class IdentifiedHunk(NamedTuple):
    hunk_id: str
    hunk: DiffHunk


def content_digest(hunk: DiffHunk) -> str:
    """
    Short hex digest of a hunk's file path and body.

    Header line numbers are left out so the id survives edits elsewhere in the
    same file. Every line is newline terminated so different line splits of
    the same text hash differently.
    """
    digest = hashlib.sha1()
    digest.update(hunk.display_file.encode("utf-8", errors="surrogateescape"))
    for line in hunk.lines:
        digest.update(line.raw.encode("utf-8", errors="surrogateescape"))
        digest.update(b"\n")
    return digest.hexdigest()[:HUNK_ID_LENGTH]


def assign_ids(hunks) -> list[IdentifiedHunk]:
    """Pair every hunk with its id; repeated digests get -2, -3, ... in order."""
    seen: dict[str, int] = {}
    identified = []
    for hunk in hunks:
        candidate = content_digest(hunk)
        seen[candidate] = seen.get(candidate, 0) + 1
        occurrence = seen[candidate]
        hunk_id = candidate if occurrence == 1 else f"{candidate}-{occurrence}"
        identified.append(IdentifiedHunk(hunk_id, hunk))
    return identified


def find_hunk(identified, hunk_id: str) -> DiffHunk | None:
    for candidate in identified:
        if candidate.hunk_id == hunk_id:
            return candidate.hunk
    return None
