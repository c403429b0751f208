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


"""
Sequence editor used during ``git rebase -i``.

Git runs ``$GIT_SEQUENCE_EDITOR <todo-file>``; this module rewrites the single
``pick`` step of the wanted commit into ``edit`` so the rebase pauses there.
"""

import shlex
import sys
from pathlib import Path

import typer

app = typer.Typer(add_completion=False)

_PICK_COMMANDS = ("pick", "p")


def mark_edit(todo: str, sha: str) -> tuple[str, bool]:
    """Return the rewritten todo text and whether a step was marked."""
    lines = todo.splitlines(keepends=True)
    for i, line in enumerate(lines):
        parts = line.split(maxsplit=2)
        if len(parts) < 2 or parts[0] not in _PICK_COMMANDS:
            continue
        if sha.startswith(parts[1]) or parts[1].startswith(sha):
            lines[i] = "edit" + line[len(parts[0]) :]
            return "".join(lines), True
    return todo, False


def edit_command(sha: str) -> str:
    """Shell command for GIT_SEQUENCE_EDITOR that stops the rebase at ``sha``."""
    parts = [sys.executable, "-m", "gitscalpel.core.rewrite.sequence_editor", sha]
    return " ".join(shlex.quote(part) for part in parts)


@app.command()
def main(
    sha: str = typer.Argument(..., help="Commit whose pick step becomes edit."),
    todo_path: Path = typer.Argument(..., help="Rebase todo file written by git."),
) -> None:
    todo = todo_path.read_text(encoding="utf-8")
    updated, marked = mark_edit(todo, sha)
    if not marked:
        typer.echo(f"no pick step for {sha} in rebase todo", err=True)
        raise typer.Exit(1)
    todo_path.write_text(updated, encoding="utf-8")


if __name__ == "__main__":
    app()
