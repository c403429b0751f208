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


from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field

from gitscalpel.core.commands.git_commands import ApplyMode, GitCommands
from gitscalpel.core.data.pick_group import LineRange, PickGroup
from gitscalpel.core.git_interface.interface import GitInterface
from gitscalpel.core.git_interface.SubprocessGitInterface import (
    SubprocessGitInterface,
)


@dataclass
class GlobalConfig:
    verbose: bool = False
    silent: bool = False
    preview_lines: Annotated[int, Field(ge=0)] = 4
    color: Literal["auto", "always", "never"] = "auto"


@dataclass(frozen=True)
class GlobalContext:
    repo_path: Path
    git_interface: GitInterface
    git_commands: GitCommands
    verbose: bool
    silent: bool
    preview_lines: int
    color: Literal["auto", "always", "never"]

    @classmethod
    def from_global_config(cls, config: GlobalConfig, repo_path: Path):
        git_interface = SubprocessGitInterface(repo_path)
        git_commands = GitCommands(git_interface)

        return GlobalContext(
            repo_path,
            git_interface,
            git_commands,
            config.verbose,
            config.silent,
            config.preview_lines,
            config.color,
        )


@dataclass(frozen=True)
class ListContext:
    staged: bool = False
    commit: str | None = None
    file: str | None = None
    full: bool = False
    blame: bool = False


@dataclass(frozen=True)
class ApplyContext:
    ids: list[str]
    mode: ApplyMode
    line_range: LineRange | None = None
    # undo reads the diff of this commit instead of the working tree / index
    commit: str | None = None


@dataclass(frozen=True)
class UndoFileContext:
    files: list[str]
    commit: str


@dataclass(frozen=True)
class CommitContext:
    picks: list
    message: str


@dataclass(frozen=True)
class FixupContext:
    target: str


@dataclass(frozen=True)
class RewordContext:
    target: str
    message: str


@dataclass(frozen=True)
class SquashContext:
    target: str
    message: str
    force: bool = False
    preserve_author: bool = True


@dataclass(frozen=True)
class SplitContext:
    target: str
    groups: list[PickGroup]
    rest_message: str | None = None
