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

from gitscalpel.context import FixupContext
from gitscalpel.core.exceptions import handle_gitscalpel_exception
from gitscalpel.core.logging.utils import time_block
from gitscalpel.core.validation import validate_git_repository


@handle_gitscalpel_exception
def main(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="Commit to fold the staged changes into."),
) -> None:
    """Fold the staged changes into an earlier commit.

    Later commits are replayed on top. If that conflicts the rebase is left
    in progress for you to resolve.
    """
    global_context = ctx.obj
    validate_git_repository(global_context.git_commands)

    from gitscalpel.pipelines.fixup_pipeline import FixupPipeline

    with time_block("Fixup E2E"):
        outcome = FixupPipeline(global_context, FixupContext(target)).run()
    outcome.raise_for_status("fixup")

    logger.info(f"Folded staged changes into {target}")
