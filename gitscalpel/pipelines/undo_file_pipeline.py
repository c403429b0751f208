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


from loguru import logger

from gitscalpel.context import GlobalContext, UndoFileContext
from gitscalpel.core.commands.git_commands import ApplyMode, DiffSource
from gitscalpel.core.exceptions import FileNotInCommitError
from gitscalpel.core.patch.slicer import combine_patches

from .hunk_selection import unique


def _normalize(path: str) -> str:
    while path.startswith("./"):
        path = path[2:]
    return path


class UndoFilePipeline:
    """Reverse every hunk a commit made to the given files."""

    def __init__(self, global_context: GlobalContext, undo_context: UndoFileContext):
        self.global_context = global_context
        self.undo_context = undo_context

    def run(self) -> list[str]:
        git_commands = self.global_context.git_commands
        sha = git_commands.resolve_commit(self.undo_context.commit)
        hunks = git_commands.get_hunks(DiffSource(commit=sha))

        files = unique(_normalize(f) for f in self.undo_context.files)
        selected = []
        missing = []
        for file in files:
            matches = [hunk for hunk in hunks if file in hunk.paths]
            if not matches:
                missing.append(file)
            selected.extend(h for h in matches if h not in selected)

        if missing:
            raise FileNotInCommitError(
                f"{', '.join(missing)} not found in commit {self.undo_context.commit}",
                "Nothing was changed.",
            )

        git_commands.apply_patch(combine_patches(selected), ApplyMode.DISCARD)
        logger.debug(f"Reverted {len(selected)} hunk(s) of {len(files)} file(s)")
        return files
