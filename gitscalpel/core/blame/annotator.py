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


from dataclasses import dataclass

from ..commands.git_commands import INDEX_REVISION, UNATTRIBUTED
from ..data.diff_hunk import NULL_DEVICE, DiffHunk, DiffLine, LineKind

# attribution shown for marker lines such as "\ No newline at end of file"
NO_ATTRIBUTION = " " * len(UNATTRIBUTED)


@dataclass(frozen=True)
class BlameRevisions:
    """
    Revisions to blame each side of a hunk against.

    ``before`` is None when the old side has no history (root commit);
    ``after`` is None for the working tree and ``INDEX_REVISION`` for staged
    content.
    """

    before: str | None
    after: str | None

    @classmethod
    def for_commit(cls, sha: str, parent: str | None) -> "BlameRevisions":
        return cls(before=parent, after=sha)

    @classmethod
    def for_worktree(cls) -> "BlameRevisions":
        return cls(before="HEAD", after=None)

    @classmethod
    def for_index(cls) -> "BlameRevisions":
        return cls(before="HEAD", after=INDEX_REVISION)


def _lookup(git_commands, path: str, start: int, count: int, revision) -> list[str]:
    if count <= 0 or not path or path == NULL_DEVICE:
        return []
    return git_commands.blame(path, start, count, revision)


def annotate(
    hunk: DiffHunk, git_commands, revisions: BlameRevisions
) -> list[tuple[DiffLine, str]]:
    """Pair every hunk line with the short sha that last touched it."""
    header = hunk.parsed_header
    old_hashes: list[str] = []
    new_hashes: list[str] = []
    if header is not None:
        if revisions.before is not None:
            old_hashes = _lookup(
                git_commands,
                hunk.old_file,
                header.old_start,
                header.old_count,
                revisions.before,
            )
        new_hashes = _lookup(
            git_commands,
            hunk.new_file,
            header.new_start,
            header.new_count,
            revisions.after,
        )

    def take(hashes: list[str], cursor: int) -> str:
        return hashes[cursor] if cursor < len(hashes) else UNATTRIBUTED

    annotated = []
    old_cursor = 0
    new_cursor = 0
    for line in hunk.lines:
        if line.kind is LineKind.CONTEXT:
            annotated.append((line, take(new_hashes, new_cursor)))
            old_cursor += 1
            new_cursor += 1
        elif line.kind is LineKind.DELETION:
            annotated.append((line, take(old_hashes, old_cursor)))
            old_cursor += 1
        elif line.kind is LineKind.ADDITION:
            annotated.append((line, take(new_hashes, new_cursor)))
            new_cursor += 1
        else:
            annotated.append((line, NO_ATTRIBUTION))
    return annotated
