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


import importlib.metadata
import signal
import sys

import typer
from loguru import logger

from gitscalpel.core.logging.logging import get_log_directory

# 128 + SIGINT, what shells report for an interrupted process
INTERRUPTED_EXIT_CODE = 130


def ensure_utf8_output():
    # diffs carry arbitrary file content; never fail on a non-ascii line
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8", errors="replace")


def setup_signal_handlers():
    """Exit cleanly on Ctrl+C or SIGTERM instead of printing a traceback."""

    def on_signal(signum, frame):
        logger.warning(
            "Interrupted. If a rebase was running, check 'git status' and use "
            "'git rebase --continue' or 'git rebase --abort'."
        )
        raise typer.Exit(INTERRUPTED_EXIT_CODE)

    for signum in (signal.SIGINT, signal.SIGTERM):
        signal.signal(signum, on_signal)


def installed_version() -> str | None:
    try:
        return importlib.metadata.version("gitscalpel")
    except importlib.metadata.PackageNotFoundError:
        return None


def version_callback(value: bool):
    """Print the installed version and exit."""
    if not value:
        return
    version = installed_version()
    typer.echo(f"gitscalpel version {version}" if version else "gitscalpel version: development")
    raise typer.Exit()


def get_log_dir_callback(value: bool):
    """Print where log files are written and exit."""
    if not value:
        return
    typer.echo(str(get_log_directory()))
    raise typer.Exit()
