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

from gitscalpel.context import ListContext
from gitscalpel.core.exceptions import ValidationError, handle_gitscalpel_exception
from gitscalpel.core.logging.utils import time_block
from gitscalpel.core.ui.theme import select_theme
from gitscalpel.core.validation import validate_git_repository


@handle_gitscalpel_exception
def main(
    ctx: typer.Context,
    staged: bool = typer.Option(False, "--staged", help="List staged hunks."),
    file: str | None = typer.Option(None, "--file", help="Only hunks of this path."),
    commit: str | None = typer.Option(
        None, "--commit", help="List the hunks a commit introduced."
    ),
    full: bool = typer.Option(False, "--full", help="Print every line, numbered."),
    blame: bool = typer.Option(
        False, "--blame", help="Print every line with the commit that last touched it."
    ),
) -> None:
    """List hunks with their ids.

    Examples:
        # Unstaged changes
        gitscalpel hunks

        # Numbered lines of the hunks a commit made to one file
        gitscalpel hunks --commit HEAD~2 --file src/app.py --full
    """
    global_context = ctx.obj
    validate_git_repository(global_context.git_commands)
    if staged and commit:
        raise ValidationError("--staged and --commit cannot be combined")

    from gitscalpel.pipelines.list_pipeline import ListPipeline

    list_context = ListContext(
        staged=staged, commit=commit, file=file, full=full, blame=blame
    )
    with time_block("Hunks E2E"):
        output = ListPipeline(
            global_context, list_context, select_theme(global_context.color)
        ).run()

    for line in output:
        typer.echo(line)
