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


from pathlib import Path

import typer
from colorama import just_fix_windows_console
from loguru import logger

from gitscalpel.commands import (
    commit,
    config,
    discard,
    fixup,
    hunks,
    reword,
    show,
    split,
    squash,
    stage,
    undo,
    undo_file,
    unstage,
)
from gitscalpel.context import GlobalConfig, GlobalContext
from gitscalpel.core.config.config_loader import ConfigLoader
from gitscalpel.core.exceptions import handle_gitscalpel_exception
from gitscalpel.core.logging.logging import setup_logger
from gitscalpel.runtimeutil import (
    ensure_utf8_output,
    get_log_dir_callback,
    setup_signal_handlers,
    version_callback,
)

# ANSI colours on Windows consoles; other platforms are left untouched
just_fix_windows_console()


# create app
app = typer.Typer(
    help="gitscalpel: address and rewrite individual git hunks from scripts",
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    add_completion=False,
)

# attach commands
app.command(name="hunks")(hunks.main)
app.command(name="show")(show.main)
app.command(name="stage")(stage.main)
app.command(name="unstage")(unstage.main)
app.command(name="discard")(discard.main)
app.command(name="undo")(undo.main)
app.command(name="undo-file")(undo_file.main)
app.command(name="commit")(commit.main)
app.command(name="fixup")(fixup.main)
app.command(name="reword")(reword.main)
app.command(name="squash")(squash.main)
app.command(
    name="split",
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)(split.main)
app.command(name="config")(config.main)

# which commands run without a global context
config_command = "config"


def setup_config_args(**kwargs):
    config_args = {}

    for key, item in kwargs.items():
        if item is not None:
            config_args[key] = item

    return config_args


@app.callback(invoke_without_command=True)
@handle_gitscalpel_exception
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_path: bool = typer.Option(
        False,
        "--log-dir",
        "-LD",
        callback=get_log_dir_callback,
        is_eager=True,
        help="Show log path (where logs for gitscalpel live) and exit",
    ),
    repo_path: str = typer.Option(
        ".",
        "--repo",
        help="Path to the git repository to operate on.",
    ),
    custom_config: str | None = typer.Option(
        None,
        "--custom-config",
        help="Path to a custom config file",
    ),
    verbose: bool | None = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
    silent: bool | None = typer.Option(
        None,
        "--silent",
        "-s",
        help="Do not log anything to the console; data output is unaffected.",
    ),
) -> None:
    """
    Global setup callback. Initialize shared objects here.
    """
    # skip --help in subcommands
    if any(arg in ctx.help_option_names for arg in ctx.args):
        return

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    # initial setup of logger, will be updated later if needed
    setup_logger(ctx.invoked_subcommand, debug=verbose or False, silent=silent or False)

    if ctx.invoked_subcommand == config_command:
        return

    config_args = setup_config_args(verbose=verbose, silent=silent)

    custom_config_path = Path(custom_config) if custom_config else None
    loaded = ConfigLoader(GlobalConfig).load(
        config_args, Path(repo_path), custom_config_path
    )
    config = loaded.config

    setup_logger(ctx.invoked_subcommand, debug=config.verbose, silent=config.silent)

    logger.debug(
        f"Used {loaded.used_sources} to build global context "
        f"(defaults: {loaded.used_defaults})."
    )
    ctx.obj = GlobalContext.from_global_config(config, Path(repo_path))


def run_app():
    """Run the application with global exception handling."""
    # force stdout to be utf8 as it can be weird with typers console.print sometimes
    ensure_utf8_output()
    # Set up signal handlers for graceful shutdown
    setup_signal_handlers()
    # launch cli
    app(prog_name="gitscalpel")


if __name__ == "__main__":
    run_app()
