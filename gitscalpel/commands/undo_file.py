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

from gitscalpel.context import UndoFileContext
from gitscalpel.core.exceptions import ValidationError, handle_gitscalpel_exception
from gitscalpel.core.validation import validate_git_repository


@handle_gitscalpel_exception
def main(
    ctx: typer.Context,
    files: list[str] = typer.Argument(..., help="Paths as shown in the diff."),
    from_ref: str = typer.Option(..., "--from", help="Commit whose changes to reverse."),
) -> None:
    """Reverse everything a commit changed in the given files."""
    global_context = ctx.obj
    validate_git_repository(global_context.git_commands)
    if not files:
        raise ValidationError("at least one file is required")

    from gitscalpel.pipelines.undo_file_pipeline import UndoFilePipeline

    reverted = UndoFilePipeline(
        global_context, UndoFileContext(files, from_ref)
    ).run()
    for file in reverted:
        typer.echo(file, err=True)
