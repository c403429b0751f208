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
    ids: list[str] = typer.Argument(..., help="Unstaged hunk ids to throw away."),
    lines: str | None = typer.Option(
        None, "--lines", help="Only this line range (N or A-B) of a single hunk."
    ),
) -> None:
    """Discard unstaged hunks from the working tree. This cannot be undone."""
    run_apply(ctx, ids, lines, ApplyMode.DISCARD)
