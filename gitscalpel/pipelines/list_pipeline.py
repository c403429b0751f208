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


"""Rendering of hunk listings and single hunks for stdout."""

from gitscalpel.context import GlobalContext, ListContext
from gitscalpel.core.blame.annotator import BlameRevisions, annotate
from gitscalpel.core.commands.git_commands import DiffSource
from gitscalpel.core.data.diff_hunk import DiffHunk, DiffLine, LineKind
from gitscalpel.core.diff.hunk_id import IdentifiedHunk, find_hunk
from gitscalpel.core.exceptions import hunk_not_found
from gitscalpel.core.logging.utils import log_hunks
from gitscalpel.core.ui.theme import PLAIN, Theme

_LINE_STYLES = {
    LineKind.ADDITION: "diff_added",
    LineKind.DELETION: "diff_removed",
    LineKind.CONTEXT: "diff_context",
}


def render_line(line: DiffLine, theme: Theme) -> str:
    style = _LINE_STYLES.get(line.kind)
    return theme.apply(style, line.raw) if style else line.raw


def render_summary(item: IdentifiedHunk, theme: Theme = PLAIN) -> str:
    hunk = item.hunk
    func = f" {hunk.function_context}" if hunk.function_context else ""
    return (
        f"{theme.apply('hunk_id', item.hunk_id)} "
        f"{theme.apply('file', hunk.display_file)}{func} "
        f"{theme.apply('stats', f'(+{hunk.additions} -{hunk.deletions})')}"
    )


def render_preview(hunk: DiffHunk, preview_lines: int, theme: Theme = PLAIN) -> list[str]:
    changed = [line for line in hunk.lines if line.is_change]
    out = [f"  {render_line(line, theme)}" for line in changed[:preview_lines]]
    if len(changed) > preview_lines:
        more = f"... (+{len(changed) - preview_lines} more lines)"
        out.append(f"  {theme.apply('muted', more)}")
    return out


def render_numbered(hunk: DiffHunk, theme: Theme = PLAIN) -> list[str]:
    width = len(str(len(hunk.lines)))
    return [
        f"  {n:>{width}}:{render_line(line, theme)}"
        for n, line in enumerate(hunk.lines, start=1)
    ]


def render_blamed(annotated, theme: Theme = PLAIN) -> list[str]:
    return [
        f"  {theme.apply('blame', sha)} {render_line(line, theme)}"
        for line, sha in annotated
    ]


class ListPipeline:
    """Produce the text of ``hunks`` for one diff source."""

    def __init__(
        self,
        global_context: GlobalContext,
        list_context: ListContext,
        theme: Theme = PLAIN,
    ):
        self.global_context = global_context
        self.list_context = list_context
        self.theme = theme

    def _source_and_revisions(self) -> tuple[DiffSource, BlameRevisions]:
        git_commands = self.global_context.git_commands
        if self.list_context.commit is not None:
            sha = git_commands.resolve_commit(self.list_context.commit)
            revisions = BlameRevisions.for_commit(sha, git_commands.parent_of(sha))
            return DiffSource(commit=sha), revisions
        if self.list_context.staged:
            return DiffSource(staged=True), BlameRevisions.for_index()
        return DiffSource(), BlameRevisions.for_worktree()

    def run(self) -> list[str]:
        git_commands = self.global_context.git_commands
        source, revisions = self._source_and_revisions()
        identified = git_commands.get_identified_hunks(source, self.list_context.file)
        log_hunks("List", identified)

        out = []
        for item in identified:
            out.append(render_summary(item, self.theme))
            if self.list_context.blame:
                annotated = annotate(item.hunk, git_commands, revisions)
                out.extend(render_blamed(annotated, self.theme))
            elif self.list_context.full:
                out.extend(render_numbered(item.hunk, self.theme))
            else:
                out.extend(
                    render_preview(
                        item.hunk, self.global_context.preview_lines, self.theme
                    )
                )
            out.append("")
        return out


class ShowPipeline:
    """Find one hunk and render its header and numbered lines."""

    def __init__(
        self,
        global_context: GlobalContext,
        hunk_id: str,
        commit: str | None = None,
        theme: Theme = PLAIN,
    ):
        self.global_context = global_context
        self.hunk_id = hunk_id
        self.commit = commit
        self.theme = theme

    def _find(self) -> DiffHunk:
        git_commands = self.global_context.git_commands
        if self.commit is not None:
            sha = git_commands.resolve_commit(self.commit)
            sources = [DiffSource(commit=sha)]
            where = f"commit {self.commit}"
        else:
            # working tree first, then the index
            sources = [DiffSource(), DiffSource(staged=True)]
            where = "working tree or staged changes"

        for source in sources:
            hunk = find_hunk(git_commands.get_identified_hunks(source), self.hunk_id)
            if hunk is not None:
                return hunk
        raise hunk_not_found(self.hunk_id, where)

    def run(self) -> list[str]:
        hunk = self._find()
        return [self.theme.apply("diff_hunk", hunk.header)] + render_numbered(
            hunk, self.theme
        )
