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

from gitscalpel.context import CommitContext
from gitscalpel.core.data.pick_group import join_message
from gitscalpel.core.exceptions import handle_gitscalpel_exception
from gitscalpel.core.logging.utils import time_block
from gitscalpel.core.validation import (
    parse_pick_id,
    validate_git_repository,
    validate_messages,
)


@handle_gitscalpel_exception
def main(
    ctx: typer.Context,
    ids: list[str] = typer.Argument(
        ..., help="Hunk ids, optionally with line ranges: ID or ID:2,5-7."
    ),
    message: list[str] = typer.Option(
        None, "--message", "-m", help="Commit message; repeat for more paragraphs."
    ),
) -> None:
    """Stage the given hunks and commit them in one step.

    Refuses to run while the index holds other staged changes.

    Examples:
        gitscalpel commit 3f2a9c1 a81b0de -m "Fix off-by-one in pager"
        gitscalpel commit 3f2a9c1:2-4,9 -m "Log retries" -m "Longer body."
    """
    global_context = ctx.obj
    validate_git_repository(global_context.git_commands)

    picks = [pick for text in ids for pick in parse_pick_id(text)]
    commit_context = CommitContext(picks, join_message(validate_messages(message)))

    from gitscalpel.pipelines.commit_pipeline import CommitPipeline

    with time_block("Commit E2E"):
        committed = CommitPipeline(global_context, commit_context).run()

    for hunk_id in committed:
        typer.echo(hunk_id, err=True)
    logger.info(
        f"Committed {len(committed)} hunk(s) as "
        f"{global_context.git_commands.short_sha('HEAD')}"
    )
