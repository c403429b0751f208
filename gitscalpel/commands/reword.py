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

from gitscalpel.context import RewordContext
from gitscalpel.core.data.pick_group import join_message
from gitscalpel.core.exceptions import handle_gitscalpel_exception
from gitscalpel.core.logging.utils import time_block
from gitscalpel.core.validation import validate_git_repository, validate_messages


@handle_gitscalpel_exception
def main(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="Commit to reword."),
    message: list[str] = typer.Option(
        None, "--message", "-m", help="New message; repeat for more paragraphs."
    ),
) -> None:
    """Change the message of any commit on the current branch."""
    global_context = ctx.obj
    git_commands = global_context.git_commands
    validate_git_repository(git_commands)
    reword_context = RewordContext(target, join_message(validate_messages(message)))

    from gitscalpel.pipelines.reword_pipeline import RewordPipeline

    with time_block("Reword E2E"):
        outcome, new_sha = RewordPipeline(global_context, reword_context).run()
    outcome.raise_for_status("reword")

    logger.info(f"Reworded {target}, now {git_commands.short_sha(new_sha)}")
