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


import os
import subprocess
from pathlib import Path

from loguru import logger

from ..exceptions import git_not_found
from .interface import GitInterface

_LOG_LIMIT = 2000


def _truncate(text: str) -> str:
    return text[:_LOG_LIMIT] + ("...(truncated)" if len(text) > _LOG_LIMIT else "")


class SubprocessGitInterface(GitInterface):
    """Runs the `git` executable found on PATH inside one repository."""

    def __init__(self, repo_path: str | Path | None = None) -> None:
        self.repo_path = Path(repo_path or ".")

    def run_git_text(
        self,
        args: list[str],
        input_text: str | None = None,
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> subprocess.CompletedProcess[str]:
        effective_cwd = str(cwd) if cwd is not None else str(self.repo_path)
        # extra variables are layered over the inherited environment
        effective_env = {**os.environ, **env} if env else None
        cmd = ["git"] + args
        logger.debug(f"$ {' '.join(cmd)} (cwd={effective_cwd})")

        try:
            result = subprocess.run(
                cmd,
                input=input_text,
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=True,
                check=False,
                env=effective_env,
                cwd=effective_cwd,
            )
        except FileNotFoundError as e:
            raise git_not_found() from e

        logger.debug(
            "git exited {code}\nstdout: {out}\nstderr: {err}",
            code=result.returncode,
            out=_truncate(result.stdout or ""),
            err=_truncate(result.stderr or ""),
        )
        return result
