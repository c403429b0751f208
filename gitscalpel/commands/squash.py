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


import typer
from loguru import logger

from gitscalpel.context import SquashContext
from gitscalpel.core.data.pick_group import join_message
from gitscalpel.core.exceptions import handle_gitscalpel_exception
from gitscalpel.core.logging.utils import time_block
from gitscalpel.core.validation import validate_git_repository, validate_messages


@handle_gitscalpel_exception
def main(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="Oldest commit to include."),
    message: list[str] = typer.Option(
        None, "--message", "-m", help="Message of the squashed commit."
    ),
    force: bool = typer.Option(
        False, "--force", help="Allow merge commits in the range."
    ),
    no_preserve_author: bool = typer.Option(
        False,
        "--no-preserve-author",
        help="Author the result as yourself instead of the oldest commit's author.",
    ),
) -> None:
    """Squash TARGET and every later commit up to HEAD into one commit.

    Examples:
        gitscalpel squash HEAD~3 -m "Add pagination"
    """
    global_context = ctx.obj
    git_commands = global_context.git_commands
    validate_git_repository(git_commands)
    squash_context = SquashContext(
        target,
        join_message(validate_messages(message)),
        force=force,
        preserve_author=not no_preserve_author,
    )

    from gitscalpel.pipelines.squash_pipeline import SquashPipeline

    with time_block("Squash E2E"):
        new_sha = SquashPipeline(global_context, squash_context).run()

    logger.info(f"Squashed into {git_commands.short_sha(new_sha)}")
