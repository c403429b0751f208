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
Custom exception hierarchy for the gitscalpel CLI application.

Every failure a command can report maps onto one of these classes, so the
command layer can print one clean ``error:`` line and exit non-zero without
leaking tracebacks to the caller.
"""

import functools
import sys

import typer
from loguru import logger


class GitScalpelError(Exception):
    """
    Base exception for all gitscalpel-related errors.

    All gitscalpel-specific exceptions should inherit from this class
    to enable consistent error handling throughout the application.
    """

    def __init__(self, message: str, details: str = None):
        """
        Initialize a GitScalpelError.

        Args:
            message: Main error message for the user
            details: Additional technical details, usually git's own output
        """
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(GitScalpelError):
    """
    Input validation errors.

    Raised for malformed hunk references, line ranges or argument
    combinations. Nothing has been mutated when this is raised.
    """

    pass


class LookupFailedError(GitScalpelError):
    """A requested hunk, file or commit is not present."""

    pass


class HunkNotFoundError(LookupFailedError):
    pass


class FileNotInCommitError(LookupFailedError):
    pass


class PreconditionError(GitScalpelError):
    """
    Repository state blocks the operation.

    Dirty working tree, staged content that would be mixed in, a rebase
    already in progress or merge commits without --force.
    """

    pass


class ConfigurationError(GitScalpelError):
    """
    Configuration-related errors.

    Raised when configuration files are invalid or contain
    incompatible settings.
    """

    pass


class UnsupportedHunkError(GitScalpelError):
    """Raised when asked to select lines of a hunk that can only move whole."""

    pass


class GitError(GitScalpelError):
    """
    Errors related to git operations.

    Raised when git commands fail or when git repository
    state is invalid for the requested operation.
    """

    pass


class PatchApplyError(GitError):
    pass


class CommitFailedError(GitError):
    pass


class RebaseConflictError(GitError):
    """
    A history rewrite stopped on a conflict.

    The rebase is deliberately left in progress; ``details`` tells the user how
    to continue or abort it.
    """

    pass


# Convenience functions for creating common errors
def git_not_found() -> GitError:
    """Create a GitError for when git is not available."""
    return GitError(
        "Git is not installed or not in PATH",
        "Please install git and ensure it's available in your PATH environment variable",
    )


def not_git_repository(path: str = ".") -> GitError:
    """Create a GitError for when not in a git repository."""
    return GitError(
        f"Not a git repository: {path}",
        "Run 'git init' to initialize a git repository or navigate to an existing repository",
    )


def hunk_not_found(hunk_id: str, where: str) -> HunkNotFoundError:
    return HunkNotFoundError(
        f"hunk {hunk_id} not found in {where}",
        "Hunk ids change whenever the diff changes; run 'gitscalpel hunks' again.",
    )


def commit_not_found(ref: str) -> LookupFailedError:
    return LookupFailedError(f"commit not found: {ref}")


def handle_gitscalpel_exception(func):
    """
    Decorator for typer commands.

    Known errors become ``error: <message>`` on stderr and exit status 1.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except GitScalpelError as e:
            logger.debug(f"{type(e).__name__}: {e.message} details={e.details}")
            print(f"error: {e.message}", file=sys.stderr)
            if e.details:
                print(e.details.rstrip("\n"), file=sys.stderr)
            raise typer.Exit(1)
        except Exception as e:
            logger.opt(exception=e).debug("Unexpected error")
            print(f"unexpected error: {e}", file=sys.stderr)
            raise typer.Exit(1)

    return wrapper
