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


from abc import ABC, abstractmethod
from pathlib import Path
from subprocess import CompletedProcess


class GitInterface(ABC):
    """
    Boundary between gitscalpel and the git executable.

    Every engine operation goes through ``run_git_text`` so tests can swap in
    a scripted implementation.
    """

    repo_path: Path

    @abstractmethod
    def run_git_text(
        self,
        args: list[str],
        input_text: str | None = None,
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> CompletedProcess[str]:
        """
        Run a git command with text input/output.

        A non-zero exit status is returned, not raised; callers decide what a
        failure means for them.
        """

    def run_git_text_out(
        self,
        args: list[str],
        input_text: str | None = None,
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> str | None:
        """Stdout of a successful command, None when git exits non-zero."""
        result = self.run_git_text(args, input_text, env, cwd)
        return result.stdout if result.returncode == 0 else None
