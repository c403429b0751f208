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


from .conftest import run_cli


class TestFixup:
    def test_fixup_head(self, cli_exe, repo):
        repo.commit_file("a.txt", "one\n", "add a")
        repo.write("a.txt", "one fixed\n")
        repo.git("add", "a.txt")

        result = run_cli(cli_exe, ["fixup", "HEAD"], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert repo.subjects() == ["init", "add a"]
        assert repo.git("show", "HEAD:a.txt").stdout == "one fixed\n"

    def test_fixup_earlier_commit(self, cli_exe, repo):
        repo.commit_file("a.txt", "one\n", "add a")
        repo.commit_file("b.txt", "two\n", "add b")
        repo.write("a.txt", "one fixed\n")
        repo.git("add", "a.txt")

        result = run_cli(cli_exe, ["fixup", "HEAD~1"], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert repo.subjects() == ["init", "add a", "add b"]
        assert repo.git("show", "HEAD~1:a.txt").stdout == "one fixed\n"
        assert repo.diff("--cached") == ""

    def test_fixup_root_commit(self, cli_exe, repo):
        repo.commit_file("a.txt", "one\n", "add a")
        repo.write(".gitkeep", "root content\n")
        repo.git("add", ".gitkeep")

        result = run_cli(cli_exe, ["fixup", "HEAD~1"], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert repo.subjects() == ["init", "add a"]
        assert repo.git("show", "HEAD~1:.gitkeep").stdout == "root content\n"

    def test_fixup_keeps_unstaged_changes(self, cli_exe, repo):
        repo.commit_file("a.txt", "one\n", "add a")
        repo.commit_file("b.txt", "two\n", "add b")
        repo.write("a.txt", "one fixed\n")
        repo.git("add", "a.txt")
        repo.write("b.txt", "two unstaged\n")

        result = run_cli(cli_exe, ["fixup", "HEAD~1"], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert repo.read("b.txt") == "two unstaged\n"

    def test_fixup_without_staged_changes(self, cli_exe, repo):
        repo.commit_file("a.txt", "one\n", "add a")
        result = run_cli(cli_exe, ["fixup", "HEAD"], cwd=repo.path)
        assert result.returncode == 1
        assert "no staged changes" in result.stderr

    def test_target_on_another_branch(self, cli_exe, repo):
        repo.git("checkout", "-q", "-b", "other")
        other = repo.commit_file("o.txt", "o\n", "other work")
        repo.git("checkout", "-q", "main")
        repo.commit_file("m.txt", "m\n", "main work")
        head = repo.sha()
        repo.write("m.txt", "m fixed\n")
        repo.git("add", "m.txt")

        result = run_cli(cli_exe, ["fixup", other], cwd=repo.path)

        assert result.returncode == 1
        assert "not an ancestor" in result.stderr
        assert repo.sha() == head
        assert repo.diff("--cached") != ""

    def test_conflict_leaves_rebase_in_progress(self, cli_exe, repo):
        repo.commit_file("a.txt", "one\n", "add a")
        repo.commit_file("a.txt", "two\n", "change a")
        repo.write("a.txt", "three\n")
        repo.git("add", "a.txt")

        result = run_cli(cli_exe, ["fixup", "HEAD~1"], cwd=repo.path)

        assert result.returncode == 1
        assert "stopped on a conflict" in result.stderr
        assert "git rebase --continue" in result.stderr
        assert "git rebase --abort" in result.stderr
        assert (repo.path / ".git" / "rebase-merge").exists()


class TestReword:
    def test_reword_head(self, cli_exe, repo):
        repo.commit_file("a.txt", "one\n", "old subject")

        result = run_cli(cli_exe, ["reword", "HEAD", "-m", "new subject"], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert repo.message() == "new subject"

    def test_reword_multiline(self, cli_exe, repo):
        repo.commit_file("a.txt", "one\n", "old subject")

        run_cli(
            cli_exe, ["reword", "HEAD", "-m", "Subject", "-m", "Body text."], cwd=repo.path
        )
        assert repo.message() == "Subject\n\nBody text."

    def test_reword_earlier_commit(self, cli_exe, repo):
        repo.commit_file("a.txt", "one\n", "add a")
        repo.commit_file("b.txt", "two\n", "add b")
        tree = repo.sha("HEAD^{tree}")

        result = run_cli(cli_exe, ["reword", "HEAD~1", "-m", "Add file a"], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert repo.subjects() == ["init", "Add file a", "add b"]
        assert repo.sha("HEAD^{tree}") == tree

    def test_reword_root_commit(self, cli_exe, repo):
        repo.commit_file("a.txt", "one\n", "add a")

        result = run_cli(cli_exe, ["reword", "HEAD~1", "-m", "Initial"], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert repo.subjects() == ["Initial", "add a"]

    def test_reword_unknown_commit(self, cli_exe, repo):
        result = run_cli(cli_exe, ["reword", "nope", "-m", "x"], cwd=repo.path)
        assert result.returncode == 1
        assert "nope" in result.stderr


class TestSquash:
    def test_squash_two_commits(self, cli_exe, repo):
        repo.commit_file("a.txt", "a\n", "add a")
        repo.commit_file("b.txt", "b\n", "add b")
        tree = repo.sha("HEAD^{tree}")

        result = run_cli(cli_exe, ["squash", "HEAD~1", "-m", "Add a and b"], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert repo.subjects() == ["init", "Add a and b"]
        assert repo.sha("HEAD^{tree}") == tree

    def test_squash_three_commits(self, cli_exe, repo):
        for name in ("a", "b", "c"):
            repo.commit_file(f"{name}.txt", f"{name}\n", f"add {name}")

        run_cli(cli_exe, ["squash", "HEAD~2", "-m", "All three"], cwd=repo.path)
        assert repo.subjects() == ["init", "All three"]

    def test_squash_keeps_author(self, cli_exe, repo):
        repo.write("a.txt", "a\n")
        repo.git("add", "a.txt")
        repo.git("commit", "-q", "-m", "add a", "--author", "Other <other@example.com>")
        repo.commit_file("b.txt", "b\n", "add b")

        run_cli(cli_exe, ["squash", "HEAD~1", "-m", "Both"], cwd=repo.path)
        author = repo.git("log", "-1", "--format=%an <%ae>").stdout.strip()
        assert author == "Other <other@example.com>"

    def test_squash_head_is_rejected(self, cli_exe, repo):
        repo.commit_file("a.txt", "a\n", "add a")
        result = run_cli(cli_exe, ["squash", "HEAD", "-m", "x"], cwd=repo.path)
        assert result.returncode == 1
        assert "nothing to squash" in result.stderr

    def test_squash_keeps_local_changes(self, cli_exe, repo):
        repo.commit_file("a.txt", "a\n", "add a")
        repo.commit_file("b.txt", "b\n", "add b")
        repo.write("a.txt", "a dirty\n")
        repo.write("untracked.txt", "loose\n")

        result = run_cli(cli_exe, ["squash", "HEAD~1", "-m", "Both"], cwd=repo.path)

        assert result.returncode == 0, result.stderr
        assert repo.read("a.txt") == "a dirty\n"
        assert repo.read("untracked.txt") == "loose\n"
        assert repo.git("show", "HEAD:a.txt").stdout == "a\n"

    def _merge_history(self, repo):
        repo.commit_file("base.txt", "base\n", "base")
        repo.git("checkout", "-q", "-b", "side")
        repo.commit_file("side.txt", "side\n", "side")
        repo.git("checkout", "-q", "main")
        repo.commit_file("main.txt", "main\n", "main work")
        repo.git("merge", "-q", "--no-ff", "side", "-m", "merge side")

    def test_merges_need_force(self, cli_exe, repo):
        self._merge_history(repo)
        result = run_cli(cli_exe, ["squash", "HEAD~2", "-m", "x"], cwd=repo.path)
        assert result.returncode == 1
        assert "merge commit" in result.stderr

    def test_merges_with_force(self, cli_exe, repo):
        self._merge_history(repo)
        tree = repo.sha("HEAD^{tree}")

        result = run_cli(
            cli_exe, ["squash", "HEAD~2", "-m", "Flattened", "--force"], cwd=repo.path
        )

        assert result.returncode == 0, result.stderr
        assert repo.sha("HEAD^{tree}") == tree
        assert repo.message() == "Flattened"
        assert repo.git("rev-list", "--merges", "HEAD").stdout == ""

    def test_target_not_an_ancestor(self, cli_exe, repo):
        repo.git("checkout", "-q", "-b", "other")
        other = repo.commit_file("o.txt", "o\n", "other work")
        repo.git("checkout", "-q", "main")
        repo.commit_file("m.txt", "m\n", "main work")

        result = run_cli(cli_exe, ["squash", other, "-m", "x"], cwd=repo.path)
        assert result.returncode == 1
        assert "not an ancestor" in result.stderr

    def test_target_on_another_branch(self, cli_exe, repo):
        repo.git("checkout", "-q", "-b", "other")
        other = repo.commit_file("o.txt", "o\n", "other work")
        repo.git("checkout", "-q", "main")
        repo.commit_file("m.txt", "m\n", "main work")
        head = repo.sha()

        result = run_cli(cli_exe, ["reword", other, "-m", "x"], cwd=repo.path)

        assert result.returncode == 1
        assert "not an ancestor" in result.stderr
        assert repo.sha() == head
        assert repo.sha("other") == other
