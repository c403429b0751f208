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
Unified diff parsing.

The parser is lenient: anything it does not recognise outside of a hunk is
skipped, since git is trusted to produce well formed output.
"""

from ..data.diff_hunk import NULL_DEVICE, DiffHunk, DiffLine, HunkHeader

_FILE_SECTION_PREFIXES = ("diff --git ", "diff --cc ", "diff --combined ")

# extended header lines that make a hunk unsafe to fragment
_METADATA_TAGS = (
    ("rename from ", "rename"),
    ("rename to ", "rename"),
    ("copy from ", "copy"),
    ("copy to ", "copy"),
    ("old mode ", "mode"),
    ("new mode ", "mode"),
    ("Binary files ", "binary"),
    ("GIT binary patch", "binary"),
)


def strip_path_prefix(raw: str) -> str:
    """
    Turn the path part of a ---/+++ line into a repository path.

    Handles the null device, the a/ and b/ prefixes, quoted paths and the
    trailing tab git adds after names containing spaces.
    """
    path = raw.split("\t", 1)[0].rstrip("\r")
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        path = path[1:-1]
    if path == NULL_DEVICE:
        return NULL_DEVICE
    if path.startswith(("a/", "b/")):
        return path[2:]
    return path


class _HunkBuilder:
    def __init__(self, old_file, new_file, file_header, header, metadata):
        self.old_file = old_file
        self.new_file = new_file
        self.file_header = file_header
        self.header = header
        self.metadata = metadata
        self.lines: list[DiffLine] = []

        parsed = HunkHeader.parse(header)
        # remaining body lines per side; None when the header is unreadable
        self.old_left = parsed.old_count if parsed else None
        self.new_left = parsed.new_count if parsed else None

    @property
    def expects_body(self) -> bool:
        if self.old_left is None:
            return False
        return self.old_left > 0 or self.new_left > 0

    def add(self, raw: str) -> None:
        line = DiffLine.from_raw(raw)
        self.lines.append(line)
        if self.old_left is None:
            return
        if raw.startswith(" "):
            self.old_left -= 1
            self.new_left -= 1
        elif raw.startswith("-"):
            self.old_left -= 1
        elif raw.startswith("+"):
            self.new_left -= 1

    def build(self) -> DiffHunk:
        return DiffHunk(
            old_file=self.old_file,
            new_file=self.new_file,
            file_header=self.file_header,
            header=self.header,
            lines=tuple(self.lines),
            unsupported_metadata=frozenset(self.metadata),
        )


def parse_diff(text: str) -> list[DiffHunk]:
    """Parse unified diff text into hunks, in diff order."""
    hunks: list[DiffHunk] = []
    if not text:
        return hunks

    old_file = ""
    new_file = ""
    header_lines: list[str] = []
    metadata: set[str] = set()
    current: _HunkBuilder | None = None

    def flush():
        nonlocal current
        if current is not None:
            hunks.append(current.build())
            current = None

    for raw in text.split("\n"):
        raw = raw.rstrip("\r")

        # body lines are taken by count first, so a deleted line that reads
        # "-- foo" is never mistaken for a file header
        if current is not None and current.expects_body:
            current.add(raw)
            continue

        if raw.startswith(_FILE_SECTION_PREFIXES):
            flush()
            old_file = ""
            new_file = ""
            header_lines = []
            metadata = set()
        elif raw.startswith("--- "):
            flush()
            old_file = strip_path_prefix(raw[4:])
            header_lines = [raw]
        elif raw.startswith("+++ "):
            flush()
            new_file = strip_path_prefix(raw[4:])
            header_lines.append(raw)
        elif raw.startswith("@@ "):
            flush()
            current = _HunkBuilder(
                old_file, new_file, "\n".join(header_lines), raw, metadata
            )
        elif current is not None:
            if raw:
                current.add(raw)
        else:
            for prefix, tag in _METADATA_TAGS:
                if raw.startswith(prefix):
                    metadata.add(tag)

    flush()
    return hunks
