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
Layered configuration.

Sources are consulted highest priority first: command line arguments, an
explicit ``--custom-config`` file, the repository's local file, environment
variables, then the user's global file. The first source that names a key
wins; keys nobody names fall back to the dataclass defaults.
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import NamedTuple

import tomllib
from loguru import logger
from platformdirs import user_config_dir
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigurationError

CONFIG_FILENAME = "gitscalpelconfig.toml"
ENV_PREFIX = "GITSCALPEL_"


def local_config_path(repo_path: Path) -> Path:
    return Path(repo_path) / CONFIG_FILENAME


def global_config_path() -> Path:
    return Path(user_config_dir("gitscalpel")) / CONFIG_FILENAME


def read_config_file(path: Path) -> dict:
    """TOML contents of ``path``; a missing or unparsable file counts as empty."""
    if not path.exists():
        logger.debug(f"{path} does not exist")
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        logger.warning(f"Failed to load {path}: {e}")
        return {}


def env_values(prefix: str = ENV_PREFIX, environ=None) -> dict:
    """``GITSCALPEL_PREVIEW_LINES=8`` becomes ``{"preview_lines": "8"}``."""
    environ = os.environ if environ is None else environ
    return {
        key[len(prefix) :].lower(): value
        for key, value in environ.items()
        if key.upper().startswith(prefix)
    }


class ConfigSource(NamedTuple):
    name: str
    values: dict


@dataclass(frozen=True)
class LoadedConfig:
    config: object
    # names of the sources that contributed at least one key
    used_sources: list[str]
    used_defaults: bool


class ConfigLoader:
    """Merges the configuration sources into one validated config dataclass."""

    def __init__(self, config_model: type):
        self.config_model = config_model
        self.adapter = TypeAdapter(config_model)

    def sources(
        self,
        input_args: dict,
        repo_path: Path,
        custom_config_path: Path | None = None,
        environ=None,
    ) -> list[ConfigSource]:
        sources = [
            ConfigSource("Input Args", input_args),
            ConfigSource("Local Config", read_config_file(local_config_path(repo_path))),
            ConfigSource("Environment Variables", env_values(environ=environ)),
            ConfigSource("Global Config", read_config_file(global_config_path())),
        ]
        if custom_config_path is not None:
            if not custom_config_path.exists():
                raise ConfigurationError(
                    f"Custom config file not found: {custom_config_path}"
                )
            sources.insert(
                1, ConfigSource("Custom Config", read_config_file(custom_config_path))
            )
        return sources

    def merge(self, sources: list[ConfigSource]) -> LoadedConfig:
        wanted = {field.name for field in fields(self.config_model)}
        merged = {}
        used = []
        for source in sources:
            logger.debug(f"{source.name}: {source.values}")
            taken = (source.values.keys() & wanted) - merged.keys()
            if not taken:
                continue
            used.append(source.name)
            merged.update({key: source.values[key] for key in taken})

        try:
            config = self.adapter.validate_python(merged)
        except PydanticValidationError as e:
            raise ConfigurationError("Invalid configuration", str(e)) from e
        return LoadedConfig(config, used, used_defaults=merged.keys() != wanted)

    def load(
        self,
        input_args: dict,
        repo_path: Path,
        custom_config_path: Path | None = None,
    ) -> LoadedConfig:
        return self.merge(self.sources(input_args, repo_path, custom_config_path))
