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
from enum import Enum
from pathlib import Path

from loguru import logger

from ..data.diff_hunk import DiffHunk
from ..diff.hunk_id import IdentifiedHunk, assign_ids
from ..diff.parser import parse_diff
from ..exceptions import (
    CommitFailedError,
    GitError,
    PatchApplyError,
    commit_not_found,
    not_git_repository,
)
from ..git_interface.interface import GitInterface
from ..rewrite.outcome import RebaseOutcome

DIFF_FORMAT_ARGS = [
    "--no-color",
    "--no-ext-diff",
    "--src-prefix=a/",
    "--dst-prefix=b/",
]

UNATTRIBUTED = "0000000"
# blame revision meaning "the staged version of the file" (stage 0 of the index)
INDEX_REVISION = ":0"
_ABBREV = 7

# keeps git from opening an editor during rewrites
_NO_EDITOR_ENV = {"GIT_EDITOR": "true"}


class ApplyMode(Enum):
    STAGE = "stage"
    UNSTAGE = "unstage"
    DISCARD = "discard"

    @property
    def reverse(self) -> bool:
        return self is not ApplyMode.STAGE

    @property
    def git_args(self) -> list[str]:
        if self is ApplyMode.STAGE:
            return ["--cached"]
        if self is ApplyMode.UNSTAGE:
            return ["--cached", "--reverse"]
        return ["--reverse"]


@dataclass(frozen=True)
class DiffSource:
    """Which diff to read: working tree vs index, index vs HEAD, or one commit."""

    staged: bool = False
    commit: str | None = None

    def describe(self) -> str:
        if self.commit is not None:
            return f"commit {self.commit}"
        return "staged changes" if self.staged else "working tree changes"


@dataclass(frozen=True)
class AuthorInfo:
    name: str
    email: str
    # git "raw" date: "<epoch> <offset>"
    date: str

    def as_env(self) -> dict[str, str]:
        return {
            "GIT_AUTHOR_NAME": self.name,
            "GIT_AUTHOR_EMAIL": self.email,
            "GIT_AUTHOR_DATE": self.date,
        }


class GitCommands:
    def __init__(self, git: GitInterface):
        self.git = git

    # -------------------------------
    # Repository state
    # -------------------------------

    def is_git_repo(self) -> bool:
        out = self.git.run_git_text_out(["rev-parse", "--is-inside-work-tree"])
        return out is not None and out.strip() == "true"

    def ensure_git_repo(self) -> None:
        if not self.is_git_repo():
            raise not_git_repository(str(self.git.repo_path))

    def has_staged_changes(self) -> bool:
        result = self.git.run_git_text(["diff", "--cached", "--quiet"])
        if result.returncode in (0, 1):
            return result.returncode == 1
        raise GitError("could not inspect the index", result.stderr)

    def has_tracked_changes(self) -> bool:
        """True when tracked files differ from HEAD, in the index or the tree."""
        result = self.git.run_git_text(
            ["status", "--porcelain", "--untracked-files=no"]
        )
        if result.returncode != 0:
            raise GitError("could not read repository status", result.stderr)
        return bool(result.stdout.strip())

    def rebase_in_progress(self) -> bool:
        for name in ("rebase-merge", "rebase-apply"):
            out = self.git.run_git_text_out(["rev-parse", "--git-path", name])
            if not out or not out.strip():
                continue
            path = Path(out.strip())
            if not path.is_absolute():
                path = self.git.repo_path / path
            if path.exists():
                return True
        return False

    # -------------------------------
    # Diffs and patches
    # -------------------------------

    def diff_text(self, source: DiffSource, file: str | None = None) -> str:
        if source.commit is not None:
            args = ["show", "--pretty=format:", *DIFF_FORMAT_ARGS, source.commit]
        else:
            args = ["diff", *DIFF_FORMAT_ARGS]
            if source.staged:
                args.append("--cached")
        if file:
            args += ["--", file]

        result = self.git.run_git_text(args)
        if result.returncode != 0:
            raise GitError(f"could not read the diff of {source.describe()}", result.stderr)
        return result.stdout

    def get_hunks(self, source: DiffSource, file: str | None = None) -> list[DiffHunk]:
        return parse_diff(self.diff_text(source, file))

    def get_identified_hunks(
        self, source: DiffSource, file: str | None = None
    ) -> list[IdentifiedHunk]:
        return assign_ids(self.get_hunks(source, file))

    def apply_patch(self, patch: str, mode: ApplyMode) -> None:
        result = self.git.run_git_text(["apply", *mode.git_args], input_text=patch)
        if result.returncode != 0:
            logger.debug(f"Rejected patch:\n{patch}")
            raise PatchApplyError(f"git apply failed ({mode.value})", result.stderr)

    # -------------------------------
    # Commits
    # -------------------------------

    def resolve_commit(self, ref: str) -> str:
        out = self.git.run_git_text_out(
            ["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"]
        )
        if not out or not out.strip():
            raise commit_not_found(ref)
        return out.strip()

    def head_sha(self) -> str | None:
        out = self.git.run_git_text_out(["rev-parse", "--verify", "--quiet", "HEAD"])
        return out.strip() if out and out.strip() else None

    def parent_of(self, sha: str) -> str | None:
        out = self.git.run_git_text_out(
            ["rev-parse", "--verify", "--quiet", f"{sha}^{{commit}}^"]
        )
        return out.strip() if out and out.strip() else None

    def short_sha(self, ref: str) -> str:
        out = self.git.run_git_text_out(["rev-parse", "--short", ref])
        return out.strip() if out else ref[:_ABBREV]

    def commit_message(self, sha: str) -> str:
        out = self.git.run_git_text_out(["log", "-1", "--format=%B", sha])
        if out is None:
            raise commit_not_found(sha)
        return out.rstrip("\n")

    def commit_subject(self, sha: str) -> str:
        out = self.git.run_git_text_out(["log", "-1", "--format=%s", sha])
        if out is None:
            raise commit_not_found(sha)
        return out.strip()

    def author_of(self, sha: str) -> AuthorInfo:
        out = self.git.run_git_text_out(
            ["show", "-s", "--date=raw", "--format=%an%n%ae%n%ad", sha]
        )
        if out is None:
            raise commit_not_found(sha)
        name, email, date = (out.split("\n") + ["", "", ""])[:3]
        return AuthorInfo(name, email, date)

    def count_commits(self, rev_range: str) -> int:
        out = self.git.run_git_text_out(["rev-list", "--count", rev_range])
        if out is None:
            raise GitError(f"could not count commits in {rev_range}")
        return int(out.strip())

    def merge_commits(self, rev_range: str) -> list[str]:
        out = self.git.run_git_text_out(["rev-list", "--merges", rev_range])
        if out is None:
            raise GitError(f"could not list commits in {rev_range}")
        return out.split()

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        result = self.git.run_git_text(
            ["merge-base", "--is-ancestor", ancestor, descendant]
        )
        if result.returncode in (0, 1):
            return result.returncode == 0
        raise GitError("could not check commit ancestry", result.stderr)

    def commit(
        self,
        message: str | None,
        extra_args: list[str] | None = None,
        env: dict | None = None,
    ) -> None:
        """
        Commit the index. ``message`` is passed on stdin; None leaves the
        message to the extra args (--no-edit, --fixup).
        """
        args = ["commit", "--quiet"]
        if message is not None:
            args += ["-F", "-"]
        args += extra_args or []

        result = self.git.run_git_text(args, input_text=message, env=env)
        if result.returncode != 0:
            output = "\n".join(p for p in (result.stdout.strip(), result.stderr.strip()) if p)
            if "nothing to commit" in output or "no changes added" in output:
                raise CommitFailedError("nothing to commit", output)
            raise CommitFailedError("git commit failed", output)

    def tree_of(self, ref: str) -> str:
        out = self.git.run_git_text_out(["rev-parse", f"{ref}^{{tree}}"])
        if not out:
            raise commit_not_found(ref)
        return out.strip()

    def commit_tree(
        self, tree: str, parents: list[str], message: str, env: dict | None = None
    ) -> str:
        args = ["commit-tree", tree]
        for parent in parents:
            args += ["-p", parent]
        result = self.git.run_git_text(args, input_text=message, env=env)
        if result.returncode != 0 or not result.stdout.strip():
            raise CommitFailedError("git commit-tree failed", result.stderr)
        return result.stdout.strip()

    def reset(self, ref: str, mode: str = "--mixed") -> None:
        result = self.git.run_git_text(["reset", "--quiet", mode, ref])
        if result.returncode != 0:
            raise GitError(f"git reset {mode} {ref} failed", result.stderr)

    def read_tree(self, ref: str) -> None:
        """Replace the index with the tree of ``ref``; the working tree is untouched."""
        result = self.git.run_git_text(["read-tree", ref])
        if result.returncode != 0:
            raise GitError(f"git read-tree {ref} failed", result.stderr)
        # read-tree drops stat data
        self.git.run_git_text(["update-index", "-q", "--refresh"])

    # -------------------------------
    # Stash
    # -------------------------------

    def stash_push(self, message: str) -> None:
        result = self.git.run_git_text(["stash", "push", "--quiet", "-m", message])
        if result.returncode != 0:
            raise GitError("could not stash local changes", result.stderr)

    def stash_pop(self) -> tuple[bool, str]:
        result = self.git.run_git_text(["stash", "pop", "--quiet"])
        return result.returncode == 0, (result.stderr or result.stdout)

    # -------------------------------
    # History rewriting
    # -------------------------------

    def rebase(
        self,
        upstream: str | None,
        sequence_editor: str = "true",
        autosquash: bool = False,
    ) -> RebaseOutcome:
        """
        Run ``git rebase -i --autostash`` onto ``upstream`` (from the root when
        None) with a programmatic sequence editor.
        """
        args = ["rebase", "-i", "--autostash"]
        if autosquash:
            args.append("--autosquash")
        args.append(upstream if upstream is not None else "--root")

        env = {**_NO_EDITOR_ENV, "GIT_SEQUENCE_EDITOR": sequence_editor}
        result = self.git.run_git_text(args, env=env)
        return self._rebase_outcome(result)

    def rebase_continue(self) -> RebaseOutcome:
        result = self.git.run_git_text(["rebase", "--continue"], env=_NO_EDITOR_ENV)
        return self._rebase_outcome(result)

    def _rebase_outcome(self, result) -> RebaseOutcome:
        diagnostic = "\n".join(
            p for p in (result.stdout.strip(), result.stderr.strip()) if p
        )
        if result.returncode == 0:
            return RebaseOutcome.success()
        if self.rebase_in_progress():
            stopped_at = self.git.run_git_text_out(
                ["rev-parse", "--verify", "--quiet", "--short", "REBASE_HEAD"]
            )
            return RebaseOutcome.conflict(
                stopped_at.strip() if stopped_at else None, diagnostic
            )
        return RebaseOutcome.failed(diagnostic)

    # -------------------------------
    # Blame
    # -------------------------------

    def blame(
        self, file: str, start: int, count: int, revision: str | None = None
    ) -> list[str]:
        """
        Abbreviated last-modifying commit per line of ``file`` from ``start``.

        ``revision`` None blames the working tree; ``INDEX_REVISION`` blames the
        staged content, where lines not yet committed come back as zeros.
        Returns an empty list when git cannot attribute the range (new file,
        range beyond end, unknown revision).
        """
        if count <= 0:
            return []
        args = ["blame", "--line-porcelain", "-L", f"{start},+{count}"]
        contents = None
        if revision == INDEX_REVISION:
            contents = self.git.run_git_text_out(["show", f"{INDEX_REVISION}:{file}"])
            if contents is None:
                return []
            args += ["--contents", "-"]
        elif revision:
            args.append(revision)
        args += ["--", file]

        out = self.git.run_git_text_out(args, input_text=contents)
        if out is None:
            return []
        return parse_line_porcelain(out)


def parse_line_porcelain(text: str) -> list[str]:
    hashes = []
    for line in text.splitlines():
        # content lines are tab prefixed and may look like anything
        if not line or line.startswith("\t"):
            continue
        token = line.split(" ", 1)[0].lstrip("^")
        if len(token) >= 40 and all(c in "0123456789abcdef" for c in token):
            hashes.append(token[:_ABBREV])
    return hashes
