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

from gitscalpel.context import ApplyContext
from gitscalpel.core.commands.git_commands import ApplyMode
from gitscalpel.core.exceptions import handle_gitscalpel_exception
from gitscalpel.core.logging.utils import time_block
from gitscalpel.core.validation import (
    validate_git_repository,
    validate_ids,
    validate_lines_option,
)


def run_apply(
    ctx: typer.Context,
    ids: list[str],
    lines: str | None,
    mode: ApplyMode,
    commit: str | None = None,
) -> None:
    """Shared body of stage, unstage, discard and undo."""
    global_context = ctx.obj
    validate_git_repository(global_context.git_commands)
    validated_ids = validate_ids(ids)
    line_range = validate_lines_option(validated_ids, lines)

    from gitscalpel.pipelines.apply_pipeline import ApplyPipeline

    apply_context = ApplyContext(validated_ids, mode, line_range, commit)
    with time_block(f"{mode.value.capitalize()} E2E"):
        applied = ApplyPipeline(global_context, apply_context).run()

    for hunk_id in applied:
        typer.echo(hunk_id, err=True)
    logger.debug(f"{mode.value} completed for {len(applied)} hunk(s)")


@handle_gitscalpel_exception
def main(
    ctx: typer.Context,
    ids: list[str] = typer.Argument(..., help="Hunk ids to stage."),
    lines: str | None = typer.Option(
        None, "--lines", help="Only this line range (N or A-B) of a single hunk."
    ),
) -> None:
    """Stage hunks, or a line range of one hunk."""
    run_apply(ctx, ids, lines, ApplyMode.STAGE)
