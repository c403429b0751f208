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

from gitscalpel.context import ApplyContext, GlobalContext
from gitscalpel.core.commands.git_commands import ApplyMode, DiffSource
from gitscalpel.core.logging.utils import log_hunks, time_block
from gitscalpel.core.patch.slicer import combine_patches

from .hunk_selection import resolve_hunks, select_ranges


class ApplyPipeline:
    """
    Stage, unstage, discard or undo whole hunks, or a line range of one hunk.
    """

    def __init__(self, global_context: GlobalContext, apply_context: ApplyContext):
        self.global_context = global_context
        self.apply_context = apply_context

    def _source(self) -> DiffSource:
        git_commands = self.global_context.git_commands
        if self.apply_context.commit is not None:
            return DiffSource(commit=git_commands.resolve_commit(self.apply_context.commit))
        return DiffSource(staged=self.apply_context.mode is ApplyMode.UNSTAGE)

    def run(self) -> list[str]:
        git_commands = self.global_context.git_commands
        mode = self.apply_context.mode
        source = self._source()

        with time_block(f"Reading hunks from {source.describe()}"):
            identified = git_commands.get_identified_hunks(source)
        log_hunks("Apply", identified)

        where = self.apply_context.commit or source.describe()
        selected = resolve_hunks(identified, self.apply_context.ids, where)

        hunks = []
        for item in selected:
            if self.apply_context.line_range is not None:
                hunks.append(
                    select_ranges(item, [self.apply_context.line_range], mode.reverse)
                )
            else:
                hunks.append(item.hunk)

        git_commands.apply_patch(combine_patches(hunks), mode)
        logger.debug(f"{mode.value}: applied {len(hunks)} hunk(s) from {where}")
        return [item.hunk_id for item in selected]
