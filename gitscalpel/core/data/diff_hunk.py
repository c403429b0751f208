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


import re
from dataclasses import dataclass, replace
from enum import Enum

NULL_DEVICE = "/dev/null"

_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(.*)$")


class LineKind(Enum):
    """The closed set of line variants found inside a hunk body."""

    CONTEXT = " "
    ADDITION = "+"
    DELETION = "-"
    # "\ No newline at end of file" and anything else the engine emits
    OTHER = ""


@dataclass(frozen=True)
class DiffLine:
    kind: LineKind
    # line text without its one-character prefix (verbatim text for OTHER)
    content: str

    @classmethod
    def from_raw(cls, raw: str) -> "DiffLine":
        if raw.startswith("+"):
            return cls(LineKind.ADDITION, raw[1:])
        if raw.startswith("-"):
            return cls(LineKind.DELETION, raw[1:])
        if raw.startswith(" "):
            return cls(LineKind.CONTEXT, raw[1:])
        return cls(LineKind.OTHER, raw)

    @property
    def raw(self) -> str:
        return self.kind.value + self.content

    @property
    def is_change(self) -> bool:
        return self.kind in (LineKind.ADDITION, LineKind.DELETION)

    @property
    def is_marker(self) -> bool:
        return self.kind is LineKind.OTHER and self.content.startswith("\\")

    def as_context(self) -> "DiffLine":
        return DiffLine(LineKind.CONTEXT, self.content)


@dataclass(frozen=True)
class HunkHeader:
    """
    The parsed form of an ``@@ -a,b +c,d @@ section`` line.

    ``section`` keeps everything after the closing ``@@`` verbatim, including
    the leading space, so a re-rendered header carries the original function
    context untouched.
    """

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    section: str = ""

    @classmethod
    def parse(cls, text: str) -> "HunkHeader | None":
        match = _HEADER_RE.match(text)
        if match is None:
            return None
        old_start, old_count, new_start, new_count, section = match.groups()
        # an omitted count means a single line
        return cls(
            int(old_start),
            1 if old_count is None else int(old_count),
            int(new_start),
            1 if new_count is None else int(new_count),
            section,
        )

    def render(self) -> str:
        return (
            f"@@ -{self.old_start},{self.old_count} "
            f"+{self.new_start},{self.new_count} @@{self.section}"
        )


def count_sides(lines) -> tuple[int, int]:
    """Return (old_count, new_count) for a sequence of DiffLine."""
    old_count = 0
    new_count = 0
    for line in lines:
        if line.kind is LineKind.CONTEXT:
            old_count += 1
            new_count += 1
        elif line.kind is LineKind.DELETION:
            old_count += 1
        elif line.kind is LineKind.ADDITION:
            new_count += 1
    return old_count, new_count


@dataclass(frozen=True)
class DiffHunk:
    """One ``@@`` block of a unified diff together with its file header."""

    # paths as written on the ---/+++ lines, prefixes stripped (may be NULL_DEVICE)
    old_file: str
    new_file: str
    # verbatim "--- ...\n+++ ..." block preceding the hunk
    file_header: str
    # verbatim "@@ ... @@ ..." line
    header: str
    lines: tuple[DiffLine, ...]
    # tags such as "rename", "copy", "mode", "binary"; non-empty means the
    # hunk can only be applied or reverted whole
    unsupported_metadata: frozenset[str] = frozenset()

    @property
    def display_file(self) -> str:
        if not self.new_file or self.new_file == NULL_DEVICE:
            return self.old_file
        return self.new_file

    @property
    def paths(self) -> set[str]:
        return {p for p in (self.old_file, self.new_file, self.display_file) if p}

    @property
    def raw_lines(self) -> list[str]:
        return [line.raw for line in self.lines]

    @property
    def additions(self) -> int:
        return sum(1 for line in self.lines if line.kind is LineKind.ADDITION)

    @property
    def deletions(self) -> int:
        return sum(1 for line in self.lines if line.kind is LineKind.DELETION)

    @property
    def has_changes(self) -> bool:
        return any(line.is_change for line in self.lines)

    @property
    def is_fragmentable(self) -> bool:
        return not self.unsupported_metadata

    @property
    def parsed_header(self) -> HunkHeader | None:
        return HunkHeader.parse(self.header)

    @property
    def function_context(self) -> str:
        parsed = self.parsed_header
        return parsed.section.strip() if parsed else ""

    def with_lines(self, lines, file_header: str | None = None) -> "DiffHunk":
        """
        Return a copy holding ``lines`` with a freshly computed header.

        Start offsets and function context come from the original header;
        counts are always recounted from ``lines``.
        """
        parsed = self.parsed_header
        if parsed is None:
            raise ValueError(f"invalid hunk header: {self.header!r}")

        lines = tuple(lines)
        old_count, new_count = count_sides(lines)
        header = HunkHeader(
            _normalize_start(parsed.old_start, old_count),
            old_count,
            _normalize_start(parsed.new_start, new_count),
            new_count,
            parsed.section,
        )
        return replace(
            self,
            header=header.render(),
            lines=lines,
            file_header=self.file_header if file_header is None else file_header,
        )


def _normalize_start(start: int, count: int) -> int:
    # "-0,0" is only valid for an empty side
    if start == 0 and count > 0:
        return 1
    return start
