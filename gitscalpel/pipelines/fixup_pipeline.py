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

from gitscalpel.context import FixupContext, GlobalContext
from gitscalpel.core.exceptions import PreconditionError
from gitscalpel.core.rewrite.outcome import RebaseOutcome
from gitscalpel.core.validation import (
    validate_no_rebase_in_progress,
    validate_on_current_branch,
)


class FixupPipeline:
    """Fold the staged changes into an earlier commit."""

    def __init__(self, global_context: GlobalContext, fixup_context: FixupContext):
        self.global_context = global_context
        self.fixup_context = fixup_context

    def run(self) -> RebaseOutcome:
        git_commands = self.global_context.git_commands

        if not git_commands.has_staged_changes():
            raise PreconditionError(
                "no staged changes to fold in", "Stage changes first, e.g. with 'gitscalpel stage'."
            )
        validate_no_rebase_in_progress(git_commands)

        target = git_commands.resolve_commit(self.fixup_context.target)
        head = git_commands.head_sha()
        validate_on_current_branch(git_commands, target, head, self.fixup_context.target)
        if target == head:
            logger.debug("Fixup target is HEAD, amending")
            git_commands.commit(None, ["--amend", "--no-edit"])
            return RebaseOutcome.success()

        git_commands.commit(None, [f"--fixup={target}"])
        logger.debug(f"Created fixup commit for {target}, rebasing")
        return git_commands.rebase(git_commands.parent_of(target), autosquash=True)
