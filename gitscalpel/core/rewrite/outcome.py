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

from ..exceptions import GitError, RebaseConflictError


class RebaseStatus(Enum):
    SUCCESS = "success"
    CONFLICT = "conflict"
    FAILED = "failed"


@dataclass(frozen=True)
class RebaseOutcome:
    """Result of starting or continuing a history rewrite."""

    status: RebaseStatus
    # short sha of the commit that could not be replayed
    conflict_ref: str | None = None
    diagnostic: str = ""

    @classmethod
    def success(cls) -> "RebaseOutcome":
        return cls(RebaseStatus.SUCCESS)

    @classmethod
    def conflict(cls, conflict_ref: str | None, diagnostic: str = "") -> "RebaseOutcome":
        return cls(RebaseStatus.CONFLICT, conflict_ref, diagnostic)

    @classmethod
    def failed(cls, diagnostic: str) -> "RebaseOutcome":
        return cls(RebaseStatus.FAILED, diagnostic=diagnostic)

    @property
    def ok(self) -> bool:
        return self.status is RebaseStatus.SUCCESS

    def guidance(self) -> list[str]:
        return [
            "resolve the conflicts, then run: git rebase --continue",
            "or give up and restore the previous history with: git rebase --abort",
        ]

    def raise_for_status(self, action: str) -> None:
        """Turn a non-successful outcome into the matching exception."""
        if self.status is RebaseStatus.CONFLICT:
            where = f" at {self.conflict_ref}" if self.conflict_ref else ""
            details = "\n".join(
                part for part in (self.diagnostic.strip(), *self.guidance()) if part
            )
            raise RebaseConflictError(f"{action} stopped on a conflict{where}", details)
        if self.status is RebaseStatus.FAILED:
            raise GitError(f"{action} failed", self.diagnostic.strip() or None)
