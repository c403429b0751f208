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

from gitscalpel.context import GlobalContext, RewordContext
from gitscalpel.core.rewrite.outcome import RebaseOutcome
from gitscalpel.core.validation import (
    validate_no_rebase_in_progress,
    validate_on_current_branch,
)


class RewordPipeline:
    """Replace the message of a commit anywhere in the current branch."""

    def __init__(self, global_context: GlobalContext, reword_context: RewordContext):
        self.global_context = global_context
        self.reword_context = reword_context

    def run(self) -> tuple[RebaseOutcome, str | None]:
        """Return the rewrite outcome and the reworded commit's new sha."""
        git_commands = self.global_context.git_commands
        message = self.reword_context.message

        validate_no_rebase_in_progress(git_commands)
        target = git_commands.resolve_commit(self.reword_context.target)
        head = git_commands.head_sha()
        validate_on_current_branch(git_commands, target, head, self.reword_context.target)

        if target == head:
            git_commands.commit(message, ["--amend", "--only", "--allow-empty"])
            return RebaseOutcome.success(), git_commands.head_sha()

        # the target keeps its distance from the tip through the rewrite
        distance = git_commands.count_commits(f"{target}..HEAD")
        subject = git_commands.commit_subject(target)

        # an "amend!" marker replaces the target's message when autosquashed
        git_commands.commit(
            f"amend! {subject}\n\n{message}", ["--only", "--allow-empty"]
        )
        outcome = git_commands.rebase(git_commands.parent_of(target), autosquash=True)
        if not outcome.ok:
            return outcome, None

        new_sha = git_commands.resolve_commit(f"HEAD~{distance}")
        logger.debug(f"Reworded {target} -> {new_sha} (HEAD~{distance})")
        return outcome, new_sha
