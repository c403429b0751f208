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

from gitscalpel.context import GlobalContext, SquashContext
from gitscalpel.core.exceptions import PreconditionError, ValidationError
from gitscalpel.core.validation import (
    validate_no_rebase_in_progress,
    validate_on_current_branch,
)

STASH_MESSAGE = "gitscalpel: autostash before squash"


class SquashPipeline:
    """
    Collapse every commit from the target to HEAD into one.

    The tip's tree is recommitted on top of the target's parent (or as a new
    root), so no rebase is needed and nothing can conflict. Tracked local
    changes are stashed around the rewrite.
    """

    def __init__(self, global_context: GlobalContext, squash_context: SquashContext):
        self.global_context = global_context
        self.squash_context = squash_context

    def _check_range(self, target: str, head: str) -> str | None:
        git_commands = self.global_context.git_commands
        ref = self.squash_context.target

        if target == head:
            raise ValidationError("target commit is HEAD; nothing to squash")
        validate_on_current_branch(git_commands, target, head, ref)

        parent = git_commands.parent_of(target)
        rev_range = f"{parent}..HEAD" if parent else "HEAD"
        merges = git_commands.merge_commits(rev_range)
        if merges and not self.squash_context.force:
            raise PreconditionError(
                f"the range contains {len(merges)} merge commit(s)",
                "Pass --force to flatten them into the squashed commit.",
            )
        return parent

    def run(self) -> str:
        git_commands = self.global_context.git_commands
        validate_no_rebase_in_progress(git_commands)

        target = git_commands.resolve_commit(self.squash_context.target)
        head = git_commands.head_sha()
        parent = self._check_range(target, head)
        count = git_commands.count_commits(f"{parent}..HEAD" if parent else "HEAD")

        env = None
        if self.squash_context.preserve_author:
            env = git_commands.author_of(target).as_env()

        message = self.squash_context.message
        if not message.endswith("\n"):
            message += "\n"

        stashed = git_commands.has_tracked_changes()
        if stashed:
            git_commands.stash_push(STASH_MESSAGE)

        try:
            tree = git_commands.tree_of("HEAD")
            if parent is None:
                # squashing down to the first commit leaves a new root
                new_sha = git_commands.commit_tree(tree, [], message, env)
            else:
                new_sha = git_commands.commit_tree(tree, [parent], message, env)
            git_commands.reset(new_sha, "--soft")
        finally:
            if stashed:
                popped, output = git_commands.stash_pop()
                if not popped:
                    logger.warning(
                        "Could not restore stashed changes cleanly; they are kept "
                        f"in 'git stash list'. {output.strip()}"
                    )

        logger.debug(f"Squashed {count} commit(s) into {new_sha}")
        return new_sha
