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


import pytest

from gitscalpel.context import UndoFileContext
from gitscalpel.core.commands.git_commands import ApplyMode, DiffSource
from gitscalpel.core.exceptions import FileNotInCommitError
from gitscalpel.core.patch.slicer import build_patch, combine_patches
from gitscalpel.pipelines.undo_file_pipeline import UndoFilePipeline

SHA = "c" * 40


def run(global_context, files, commit="HEAD"):
    return UndoFilePipeline(global_context, UndoFileContext(files, commit)).run()


@pytest.fixture
def commit_hunks(git_commands, hunk_f, hunk_g):
    git_commands.resolve_commit.return_value = SHA
    git_commands.get_hunks.return_value = [hunk_f, hunk_g]
    return [hunk_f, hunk_g]


def test_reverts_every_hunk_of_the_file(global_context, git_commands, commit_hunks):
    assert run(global_context, ["./g.txt"]) == ["g.txt"]

    git_commands.get_hunks.assert_called_once_with(DiffSource(commit=SHA))
    git_commands.apply_patch.assert_called_once_with(
        build_patch(commit_hunks[1]), ApplyMode.DISCARD
    )


def test_several_files_in_diff_order(global_context, git_commands, commit_hunks):
    run(global_context, ["f.txt", "g.txt", "f.txt"])
    git_commands.apply_patch.assert_called_once_with(
        combine_patches(commit_hunks), ApplyMode.DISCARD
    )


def test_missing_file_changes_nothing(global_context, git_commands, commit_hunks):
    with pytest.raises(FileNotInCommitError, match="nope.txt not found in commit HEAD"):
        run(global_context, ["f.txt", "nope.txt"])
    git_commands.apply_patch.assert_not_called()
