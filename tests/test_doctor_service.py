"""Tests for worktree health diagnostics."""

from git_worktree_keeper.core import WorktreeKeeper
from git_worktree_keeper.models.worktree import DiagLevel


class TestDoctor:
    def test_no_worktrees_directory(self, keeper):
        diagnostics = keeper.doctor()

        assert len(diagnostics) == 1
        assert diagnostics[0].level is DiagLevel.OK
        assert diagnostics[0].message == "no .worktrees directory (no worktrees created yet)"

    def test_healthy(self, keeper):
        keeper.add("feature/healthy")

        diagnostics = keeper.doctor()

        assert [(d.level, d.message) for d in diagnostics] == [(DiagLevel.OK, "all worktrees healthy")]

    def test_orphaned_directory(self, keeper, repo_root):
        keeper.add("feature/tracked")
        orphan = repo_root / ".worktrees" / "leftover--deadbeef"
        orphan.mkdir()

        diagnostics = keeper.doctor()

        assert len(diagnostics) == 1
        assert diagnostics[0].level is DiagLevel.WARN
        assert diagnostics[0].message == f"orphaned directory not tracked by git: {orphan}"

    def test_plain_files_are_ignored(self, keeper, repo_root):
        keeper.add("feature/tracked")
        (repo_root / ".worktrees" / "notes.txt").write_text("not a worktree\n")

        assert keeper.doctor()[0].message == "all worktrees healthy"

    def test_detached_worktree(self, keeper, git_repo, repo_root):
        detached = repo_root / ".worktrees" / "detached-test"
        git_repo.git.worktree("add", "--detach", str(detached), "HEAD")

        diagnostics = keeper.doctor()

        assert [d.level for d in diagnostics] == [DiagLevel.WARN]
        assert diagnostics[0].message.startswith("worktree has no branch (detached HEAD): ")
        assert diagnostics[0].message.endswith("detached-test")

    def test_custom_directory_name(self, repo_root):
        keeper = WorktreeKeeper(repo_root, config={"worktrees_dir_name": ".wt"})

        assert keeper.doctor()[0].message == "no .wt directory (no worktrees created yet)"
