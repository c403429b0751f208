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


from dataclasses import MISSING, fields
from pathlib import Path
from textwrap import shorten
from typing import Any

import typer
from colorama import Fore, Style

from gitscalpel.context import GlobalConfig
from gitscalpel.core.config.config_loader import (
    ENV_PREFIX,
    env_values,
    global_config_path,
    local_config_path,
    read_config_file,
)
from gitscalpel.core.exceptions import ValidationError, handle_gitscalpel_exception

SCOPES = ("local", "global", "env")

DESCRIPTIONS = {
    "verbose": "Enable verbose logging output",
    "silent": "Do not log anything to the console",
    "preview_lines": "Changed lines shown per hunk in the default listing",
    "color": "Colour show/--full output: auto, always or never",
}


def display_config(data: list[dict], max_value_length: int = 50) -> None:
    """
    Display config data in a two-line format:
    Key: Description
      Value (Source)
    """
    for item in data:
        value_display = shorten(str(item["value"]), width=max_value_length, placeholder="...")
        typer.echo(
            f"{Fore.CYAN}{Style.BRIGHT}{item['key']}{Style.RESET_ALL}: "
            f"{Fore.WHITE}{item['description']}{Style.RESET_ALL}"
        )
        typer.echo(
            f"  {Fore.GREEN}{value_display}{Style.RESET_ALL} "
            f"{Fore.YELLOW}({item['source']}){Style.RESET_ALL}"
        )
        typer.echo()


def _get_config_schema() -> dict[str, dict[str, Any]]:
    """Get the schema of available config options from GlobalConfig."""
    schema = {}
    for field in fields(GlobalConfig):
        schema[field.name] = {
            "description": DESCRIPTIONS.get(field.name, "No description available"),
            "default": None if field.default is MISSING else field.default,
            "type": field.type,
        }
    return schema


def _check_key_exists(key: str) -> dict:
    schema = _get_config_schema()
    if key not in schema:
        raise ValidationError(
            f"unknown configuration key '{key}'",
            f"Available keys: {', '.join(sorted(schema))}",
        )
    return schema[key]


def _config_path(scope: str, repo_path: Path) -> Path:
    if scope == "global":
        return global_config_path()
    return local_config_path(repo_path)


def _convert(value: str, field_info: dict) -> Any:
    """Inputs from the CLI are strings; TOML keeps real types."""
    target_type = field_info["type"]
    if target_type is bool or target_type == "bool":
        lowered = value.lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
        raise ValidationError(f"expected a boolean, got '{value}'")
    if isinstance(field_info["default"], int) and not isinstance(
        field_info["default"], bool
    ):
        try:
            converted = int(value)
        except ValueError:
            raise ValidationError(f"expected an integer, got '{value}'") from None
        if converted < 0:
            raise ValidationError(f"expected a non-negative integer, got '{value}'")
        return converted
    if isinstance(field_info["default"], str):
        allowed = getattr(target_type, "__args__", None)
        if allowed and value not in allowed:
            raise ValidationError(
                f"expected one of {', '.join(allowed)}, got '{value}'"
            )
    return value


def _set_config(key: str, value: str, scope: str, repo_path: Path) -> None:
    field_info = _check_key_exists(key)
    final_value = _convert(value, field_info)

    if scope == "env":
        env_var = f"{ENV_PREFIX}{key.upper()}"
        typer.echo(f"{Fore.GREEN}To set this as an environment variable:{Style.RESET_ALL}")
        typer.echo(f"  Windows (PowerShell): $env:{env_var}='{value}'")
        typer.echo(f"  Windows (CMD): set {env_var}={value}")
        typer.echo(f"  Linux/macOS: export {env_var}='{value}'")
        return

    config_path = _config_path(scope, repo_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_data = read_config_file(config_path)
    config_data[key] = final_value

    # Simple TOML serialization; every value is a scalar
    with open(config_path, "w", encoding="utf-8") as f:
        for k, v in config_data.items():
            if isinstance(v, bool):
                f.write(f"{k} = {str(v).lower()}\n")
            elif isinstance(v, (int, float)):
                f.write(f"{k} = {v}\n")
            else:
                f.write(f'{k} = "{v}"\n')

    typer.echo(f"{Fore.GREEN}Set {key} = {final_value} ({scope}){Style.RESET_ALL}")
    typer.echo(f"Config file: {config_path.absolute()}")


def _get_config(key: str | None, scope: str | None, repo_path: Path) -> None:
    schema = _get_config_schema()
    if key is not None:
        _check_key_exists(key)

    # Priority order for display: Local > Env > Global
    sources = []
    if scope in (None, "local"):
        sources.append(("Local Config", read_config_file(_config_path("local", repo_path))))
    if scope in (None, "env"):
        sources.append(("Environment", env_values()))
    if scope in (None, "global"):
        sources.append(("Global Config", read_config_file(_config_path("global", repo_path))))

    table_data = []
    for k in [key] if key else sorted(schema):
        value, source = schema[k]["default"], "Default"
        for source_name, config_data in sources:
            if k in config_data:
                value, source = config_data[k], source_name
                break
        table_data.append(
            {
                "key": k,
                "description": schema[k]["description"],
                "value": value,
                "source": source,
            }
        )

    display_config(table_data)


@handle_gitscalpel_exception
def main(
    ctx: typer.Context,
    key: str | None = typer.Argument(None, help="Configuration key to get or set."),
    value: str | None = typer.Argument(
        None, help="Value to set (omit to get current value)."
    ),
    scope: str | None = typer.Option(
        None,
        "--scope",
        help="Select which scope to modify. Defaults to local for setting, all for getting.",
    ),
) -> None:
    """
    Manage global and local gitscalpel configurations.

    Priority order: program arguments > custom config > local config > environment variables > global config

    Examples:
        # Show all configuration
        gitscalpel config

        # Show more changed lines per hunk in listings, for this repository
        gitscalpel config preview_lines 8

        # Never colour output, everywhere
        gitscalpel config color never --scope global
    """
    if scope is not None and scope not in SCOPES:
        raise ValidationError(
            f"invalid scope '{scope}'", f"Use one of: {', '.join(SCOPES)}"
        )
    if value is not None and key is None:
        raise ValidationError("a key is required when setting a value")

    parent_params = ctx.parent.params if ctx.parent is not None else {}
    repo_path = Path(parent_params.get("repo_path") or ".")

    if value is not None:
        _set_config(key, value, scope if scope is not None else "local", repo_path)
    else:
        _get_config(key, scope, repo_path)
