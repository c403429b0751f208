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


from .conftest import TWO_REGIONS, TWO_REGIONS_CHANGED, hunk_ids, run_cli


class TestStage:
    def test_stage_whole_hunk(self, cli_exe, repo):
        repo.commit_file("a.txt", "one\n")
        repo.write("a.txt", "two\n")
        (hunk_id,) = hunk_ids(cli_exe, repo)

        result = run_cli(cli_exe, ["stage", hunk_id], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert hunk_id in result.stderr
        assert "+two" in repo.diff("--cached")
        assert repo.diff() == ""

    def test_stage_one_of_two(self, cli_exe, repo):
        repo.commit_file("multi.txt", TWO_REGIONS)
        repo.write("multi.txt", TWO_REGIONS_CHANGED)
        first, second = hunk_ids(cli_exe, repo)

        run_cli(cli_exe, ["stage", first], cwd=repo.path)

        staged = repo.diff("--cached")
        assert "+top modified" in staged
        assert "+bottom modified" not in staged
        assert hunk_ids(cli_exe, repo) == [second]

    def test_stage_line_range(self, cli_exe, repo):
        repo.commit_file("lines.txt", "keep\n")
        repo.write("lines.txt", "keep\nnew1\nnew2\nnew3\n")
        (hunk_id,) = hunk_ids(cli_exe, repo)

        result = run_cli(cli_exe, ["stage", hunk_id, "--lines", "2-3"], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert repo.git("show", ":lines.txt").stdout == "keep\nnew1\nnew2\n"
        assert repo.read("lines.txt") == "keep\nnew1\nnew2\nnew3\n"

    def test_lines_with_several_ids(self, cli_exe, repo):
        repo.commit_file("multi.txt", TWO_REGIONS)
        repo.write("multi.txt", TWO_REGIONS_CHANGED)
        ids = hunk_ids(cli_exe, repo)

        result = run_cli(cli_exe, ["stage", *ids, "--lines", "1"], cwd=repo.path)
        assert result.returncode == 1
        assert "single hunk id" in result.stderr

    def test_range_past_hunk(self, cli_exe, repo):
        repo.commit_file("a.txt", "one\n")
        repo.write("a.txt", "two\n")
        (hunk_id,) = hunk_ids(cli_exe, repo)

        result = run_cli(cli_exe, ["stage", hunk_id, "--lines", "50-60"], cwd=repo.path)
        assert result.returncode == 1
        assert "outside hunk" in result.stderr
        assert repo.diff("--cached") == ""

    def test_unknown_id_changes_nothing(self, cli_exe, repo):
        repo.commit_file("a.txt", "one\n")
        repo.write("a.txt", "two\n")
        (hunk_id,) = hunk_ids(cli_exe, repo)

        result = run_cli(cli_exe, ["stage", hunk_id, "abcdef0"], cwd=repo.path)
        assert result.returncode == 1
        assert "abcdef0" in result.stderr
        assert repo.diff("--cached") == ""

    def test_malformed_id(self, cli_exe, repo):
        result = run_cli(cli_exe, ["stage", "nothex!"], cwd=repo.path)
        assert result.returncode == 1
        assert "invalid hunk id" in result.stderr


class TestUnstageAndDiscard:
    def test_unstage(self, cli_exe, repo):
        repo.commit_file("a.txt", "one\n")
        repo.write("a.txt", "two\n")
        repo.git("add", "a.txt")
        (hunk_id,) = hunk_ids(cli_exe, repo, "--staged")

        result = run_cli(cli_exe, ["unstage", hunk_id], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert repo.diff("--cached") == ""
        assert "+two" in repo.diff()

    def test_discard(self, cli_exe, repo):
        repo.commit_file("a.txt", "one\n")
        repo.write("a.txt", "two\n")
        (hunk_id,) = hunk_ids(cli_exe, repo)

        result = run_cli(cli_exe, ["discard", hunk_id], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert repo.read("a.txt") == "one\n"

    def test_discard_line_range(self, cli_exe, repo):
        repo.commit_file("lines.txt", "keep\n")
        repo.write("lines.txt", "keep\nnew1\nnew2\n")
        (hunk_id,) = hunk_ids(cli_exe, repo)

        run_cli(cli_exe, ["discard", hunk_id, "--lines", "3"], cwd=repo.path)
        assert repo.read("lines.txt") == "keep\nnew1\n"


class TestUndo:
    def test_undo_commit_hunk(self, cli_exe, repo):
        repo.commit_file("u.txt", "line1\nline2\nline3\n")
        repo.commit_file("u.txt", "line1\nchanged\nline3\n", "change line2")
        (hunk_id,) = hunk_ids(cli_exe, repo, "--commit", "HEAD")

        result = run_cli(cli_exe, ["undo", hunk_id, "--from", "HEAD"], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert repo.read("u.txt") == "line1\nline2\nline3\n"
        assert repo.diff("--cached") == ""

    def test_undo_keeps_unrelated_changes(self, cli_exe, repo):
        repo.commit_file("u.txt", "line1\nline2\nline3\n")
        repo.commit_file("u.txt", "line1\nchanged\nline3\n", "change line2")
        repo.commit_file("other.txt", "other\n")
        (hunk_id,) = hunk_ids(cli_exe, repo, "--commit", "HEAD~1")
        repo.write("other.txt", "other edited\n")

        result = run_cli(cli_exe, ["undo", hunk_id, "--from", "HEAD~1"], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert repo.read("u.txt") == "line1\nline2\nline3\n"
        assert repo.read("other.txt") == "other edited\n"

    def test_undo_against_changed_context(self, cli_exe, repo):
        repo.commit_file("u.txt", "line1\nline2\nline3\n")
        repo.commit_file("u.txt", "line1\nchanged\nline3\n", "change line2")
        (hunk_id,) = hunk_ids(cli_exe, repo, "--commit", "HEAD")
        repo.write("u.txt", "line1\nrewritten\nline3\n")

        result = run_cli(cli_exe, ["undo", hunk_id, "--from", "HEAD"], cwd=repo.path)

        assert result.returncode == 1
        assert repo.read("u.txt") == "line1\nrewritten\nline3\n"

    def test_undo_line_range(self, cli_exe, repo):
        repo.commit_file("u.txt", "keep\n")
        repo.commit_file("u.txt", "keep\nline1\nline2\nline3\n", "add lines")
        (hunk_id,) = hunk_ids(cli_exe, repo, "--commit", "HEAD")

        result = run_cli(
            cli_exe, ["undo", hunk_id, "--from", "HEAD", "--lines", "2-3"], cwd=repo.path
        )

        assert result.returncode == 0, result.stderr
        assert repo.read("u.txt") == "keep\nline3\n"

    def test_undo_invalid_range(self, cli_exe, repo):
        repo.commit_file("u.txt", "a\n")
        repo.commit_file("u.txt", "b\n", "change")
        (hunk_id,) = hunk_ids(cli_exe, repo, "--commit", "HEAD")

        result = run_cli(
            cli_exe, ["undo", hunk_id, "--from", "HEAD", "--lines", "5-2"], cwd=repo.path
        )
        assert result.returncode == 1
        assert "invalid line range" in result.stderr

    def test_undo_unknown_commit(self, cli_exe, repo):
        result = run_cli(cli_exe, ["undo", "abc1234", "--from", "nope"], cwd=repo.path)
        assert result.returncode == 1
        assert "nope" in result.stderr


class TestUndoFile:
    def test_undo_single_file(self, cli_exe, repo):
        repo.commit_file("f.txt", "before\n")
        repo.commit_file("f.txt", "after\n", "change f")

        result = run_cli(cli_exe, ["undo-file", "f.txt", "--from", "HEAD"], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert repo.read("f.txt") == "before\n"

    def test_undo_one_of_many(self, cli_exe, repo):
        repo.write("a.txt", "a\n")
        repo.write("b.txt", "b\n")
        repo.commit_all("add both")
        repo.write("a.txt", "a2\n")
        repo.write("b.txt", "b2\n")
        repo.commit_all("change both")

        run_cli(cli_exe, ["undo-file", "a.txt", "--from", "HEAD"], cwd=repo.path)

        assert repo.read("a.txt") == "a\n"
        assert repo.read("b.txt") == "b2\n"

    def test_undo_added_file(self, cli_exe, repo):
        repo.commit_file("new.txt", "fresh\n")

        result = run_cli(cli_exe, ["undo-file", "new.txt", "--from", "HEAD"], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert not (repo.path / "new.txt").exists()

    def test_file_not_in_commit(self, cli_exe, repo):
        repo.commit_file("f.txt", "before\n")
        repo.commit_file("f.txt", "after\n", "change f")

        result = run_cli(
            cli_exe, ["undo-file", "f.txt", "missing.txt", "--from", "HEAD"], cwd=repo.path
        )

        assert result.returncode == 1
        assert "missing.txt" in result.stderr
        assert repo.read("f.txt") == "after\n"
