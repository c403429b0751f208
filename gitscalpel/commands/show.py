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

from gitscalpel.core.exceptions import handle_gitscalpel_exception
from gitscalpel.core.ui.theme import select_theme
from gitscalpel.core.validation import validate_git_repository, validate_hunk_id


@handle_gitscalpel_exception
def main(
    ctx: typer.Context,
    hunk_id: str = typer.Argument(..., help="Hunk id from 'gitscalpel hunks'."),
    commit: str | None = typer.Option(
        None, "--commit", help="Look the hunk up in this commit."
    ),
) -> None:
    """Print one hunk with numbered lines, for picking --lines ranges."""
    global_context = ctx.obj
    validate_git_repository(global_context.git_commands)

    from gitscalpel.pipelines.list_pipeline import ShowPipeline

    output = ShowPipeline(
        global_context,
        validate_hunk_id(hunk_id),
        commit,
        select_theme(global_context.color),
    ).run()
    for line in output:
        typer.echo(line)
