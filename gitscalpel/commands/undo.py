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

from gitscalpel.core.commands.git_commands import ApplyMode
from gitscalpel.core.exceptions import handle_gitscalpel_exception

from .stage import run_apply


@handle_gitscalpel_exception
def main(
    ctx: typer.Context,
    ids: list[str] = typer.Argument(..., help="Hunk ids from 'hunks --commit REF'."),
    from_ref: str = typer.Option(..., "--from", help="Commit the hunks come from."),
    lines: str | None = typer.Option(
        None, "--lines", help="Only this line range (N or A-B) of a single hunk."
    ),
) -> None:
    """Reverse hunks of an earlier commit in the working tree.

    Examples:
        gitscalpel undo 3f2a9c1 --from HEAD~3
        gitscalpel undo 3f2a9c1 --from HEAD~3 --lines 2-4
    """
    run_apply(ctx, ids, lines, ApplyMode.DISCARD, commit=from_ref)
