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


from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from gitscalpel.core.data.diff_hunk import DiffHunk, DiffLine
from gitscalpel.core.diff.hunk_id import assign_ids


def make_hunk(raw_lines, header, file="f.txt", file_header=None, metadata=frozenset()):
    old_file = file
    if file_header is None:
        file_header = f"--- a/{file}\n+++ b/{file}"
    elif file_header.startswith("--- /dev/null"):
        old_file = "/dev/null"
    return DiffHunk(
        old_file=old_file,
        new_file=file,
        file_header=file_header,
        header=header,
        lines=tuple(DiffLine.from_raw(r) for r in raw_lines),
        unsupported_metadata=metadata,
    )


@pytest.fixture
def hunk_f():
    return make_hunk(["-a", "+A", " b"], "@@ -1,2 +1,2 @@")


@pytest.fixture
def hunk_g():
    return make_hunk(["+x"], "@@ -0,0 +1 @@", file="g.txt", file_header="--- /dev/null\n+++ b/g.txt")


@pytest.fixture
def identified(hunk_f, hunk_g):
    return assign_ids([hunk_f, hunk_g])


@pytest.fixture
def git_commands():
    """A GitCommands stand-in for a clean repository with no rebase running."""
    commands = Mock()
    commands.rebase_in_progress.return_value = False
    commands.has_tracked_changes.return_value = False
    commands.has_staged_changes.return_value = False
    return commands


@pytest.fixture
def global_context(git_commands):
    return SimpleNamespace(git_commands=git_commands, repo_path=".", preview_lines=4)
