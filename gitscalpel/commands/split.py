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

from gitscalpel.context import SplitContext
from gitscalpel.core.data.pick_group import join_message
from gitscalpel.core.exceptions import handle_gitscalpel_exception
from gitscalpel.core.logging.utils import time_block
from gitscalpel.core.validation import parse_split_args, validate_git_repository


@handle_gitscalpel_exception
def main(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="Commit to split."),
    args: list[str] = typer.Argument(
        None,
        help="--pick IDS... -m MSG groups, then optionally --rest-message MSG.",
        show_default=False,
    ),
) -> None:
    """Split a commit into several.

    Each --pick group becomes one commit, in order. Ids come from
    'gitscalpel hunks --commit TARGET' and may carry line ranges (ID:2-5,8);
    line numbers always refer to that original listing. Whatever is left
    becomes a last commit with --rest-message, or the original message.

    Examples:
        gitscalpel split HEAD --pick 3f2a9c1 -m "Add logging" --rest-message "Add paging"
        gitscalpel split HEAD~2 --pick 3f2a9c1:1-3 -m "Imports" --pick 3f2a9c1:7 a81b0de -m "Config"
    """
    global_context = ctx.obj
    validate_git_repository(global_context.git_commands)

    groups, rest_parts = parse_split_args(list(args or []))
    split_context = SplitContext(
        target, groups, join_message(rest_parts) if rest_parts else None
    )

    from gitscalpel.pipelines.split_pipeline import SplitPipeline

    with time_block("Split E2E"):
        result = SplitPipeline(global_context, split_context).run()
    result.outcome.raise_for_status("split")

    logger.info(f"Split {target} into {len(result.messages)} commit(s)")
