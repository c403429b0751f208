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
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class GitRepo:
    """A throwaway repository with one empty initial commit."""

    def __init__(self, path: Path):
        self.path = path

    def git(self, *args, check=True) -> subprocess.CompletedProcess:
        return subprocess.run(
            ["git", *args],
            cwd=self.path,
            capture_output=True,
            text=True,
            check=check,
        )

    def write(self, rel_path: str, content: str) -> None:
        target = self.path / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    def read(self, rel_path: str) -> str:
        return (self.path / rel_path).read_text(encoding="utf-8")

    def commit_file(self, rel_path: str, content: str, message: str | None = None) -> str:
        self.write(rel_path, content)
        self.git("add", rel_path)
        self.git("commit", "-q", "-m", message or f"add {rel_path}")
        return self.sha()

    def commit_all(self, message: str) -> str:
        self.git("add", "-A")
        self.git("commit", "-q", "-m", message)
        return self.sha()

    def sha(self, ref: str = "HEAD") -> str:
        return self.git("rev-parse", ref).stdout.strip()

    def message(self, ref: str = "HEAD") -> str:
        return self.git("log", "-1", "--format=%B", ref).stdout.strip()

    def subjects(self) -> list[str]:
        out = self.git("log", "--reverse", "--format=%s").stdout
        return [line for line in out.splitlines() if line]

    def diff(self, *args) -> str:
        return self.git("diff", *args).stdout

    def show(self, ref: str = "HEAD") -> str:
        return self.git("show", "--format=%s", ref).stdout


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path_factory, monkeypatch):
    """Keep config and log files of the CLI out of the user's home."""
    base = tmp_path_factory.mktemp("xdg")
    for name in ("XDG_CONFIG_HOME", "XDG_STATE_HOME", "XDG_CACHE_HOME"):
        monkeypatch.setenv(name, str(base / name.lower()))
    for key in list(os.environ):
        if key.startswith("GITSCALPEL_"):
            monkeypatch.delenv(key)


@pytest.fixture(scope="session")
def cli_exe():
    return [sys.executable, "-m", "gitscalpel"]


@pytest.fixture
def repo_factory(tmp_path):
    def create(name: str = "repo") -> GitRepo:
        path = tmp_path / name
        path.mkdir()
        repo = GitRepo(path)
        repo.git("init", "-q")
        repo.git("symbolic-ref", "HEAD", "refs/heads/main")
        repo.git("config", "user.email", "test@test.com")
        repo.git("config", "user.name", "Test")
        repo.git("config", "commit.gpgsign", "false")
        repo.commit_file(".gitkeep", "", "init")
        return repo

    return create


@pytest.fixture
def repo(repo_factory):
    return repo_factory()


def run_cli(cli_exe, args, cwd) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(PROJECT_ROOT), env.get("PYTHONPATH", "")) if p
    )
    return subprocess.run(
        [*cli_exe, *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        env=env,
    )


def hunk_ids(cli_exe, repo: GitRepo, *args) -> list[str]:
    """Ids from the summary lines of ``gitscalpel hunks``."""
    result = run_cli(cli_exe, ["hunks", *args], cwd=repo.path)
    assert result.returncode == 0, result.stderr
    return [
        line.split()[0]
        for line in result.stdout.splitlines()
        if line and not line.startswith(" ")
    ]


TWO_REGIONS = "top\n" + "ctx\n" * 20 + "bottom\n"
TWO_REGIONS_CHANGED = "top modified\n" + "ctx\n" * 20 + "bottom modified\n"
TEN_LINES = "".join(f"line{i}\n" for i in range(1, 11))
