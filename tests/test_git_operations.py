"""Tests for the GitPython-backed git primitives."""

import os
from unittest.mock import Mock, patch

import git
import pytest

from git_worktree_keeper.core import WorktreeKeeper
from git_worktree_keeper.exceptions import ConflictError, GitOperationError, NotARepositoryError
from git_worktree_keeper.services.git import GitOperations, scrub_git_environment
from git_worktree_keeper.services.git.operations import describe_command_error
from helpers import configure_user, make_commit


@pytest.fixture
def ops():
    return GitOperations()


class TestScrubGitEnvironment:
    def test_removes_repository_redirects(self):
        environ = {
            "GIT_DIR": "/elsewhere/.git",
            "GIT_WORK_TREE": "/elsewhere",
            "GIT_INDEX_FILE": "/elsewhere/.git/index",
            "GIT_PREFIX": "sub/",
            "GIT_AUTHOR_NAME": "Kept",
            "HOME": "/home/me",
        }

        removed = scrub_git_environment(environ)

        assert sorted(removed) == ["GIT_DIR", "GIT_INDEX_FILE", "GIT_PREFIX", "GIT_WORK_TREE"]
        assert environ == {"GIT_AUTHOR_NAME": "Kept", "HOME": "/home/me"}

    def test_nothing_to_remove(self):
        assert scrub_git_environment({"PATH": "/usr/bin"}) == []


class TestDescribeCommandError:
    def test_uses_stderr_without_decoration(self):
        error = git.exc.GitCommandError(["git", "branch"], 128, stderr="fatal: bad thing")
        assert describe_command_error(error) == "fatal: bad thing"

    def test_includes_stdout(self):
        error = git.exc.GitCommandError(
            ["git", "merge"], 1, stderr="", stdout="CONFLICT (content): Merge conflict in a.txt"
        )
        assert "Merge conflict in a.txt" in describe_command_error(error)

    def test_falls_back_to_command_and_status(self):
        error = git.exc.GitCommandError(["git", "push"], 1)
        message = describe_command_error(error)

        assert "git push" in message
        assert "exit code 1" in message


class TestGitOperations:
    def test_show_toplevel(self, ops, repo_root):
        assert ops.show_toplevel(repo_root) == repo_root

    def test_common_dir_is_absolute(self, ops, repo_root):
        assert ops.common_dir(repo_root) == repo_root / ".git"

    def test_branch_queries(self, ops, git_repo, repo_root):
        git_repo.git.branch("feature")

        assert ops.branch_exists(repo_root, "feature")
        assert not ops.branch_exists(repo_root, "missing")
        assert ops.rev_exists(repo_root, "HEAD")
        assert not ops.rev_exists(repo_root, "no-such-rev")
        assert not ops.remote_branch_exists(repo_root, "feature")

    def test_tag_is_not_a_branch(self, ops, git_repo, repo_root):
        git_repo.git.tag("v1")

        assert not ops.branch_exists(repo_root, "v1")
        assert ops.rev_exists(repo_root, "v1")

    def test_add_existing_branch_is_a_conflict(self, ops, git_repo, repo_root):
        git_repo.git.branch("taken")

        with pytest.raises(ConflictError, match="already exists"):
            ops.add_worktree(repo_root, repo_root / ".worktrees" / "taken", "taken", None)

    def test_delete_unmerged_branch_is_a_conflict(self, ops, git_repo, repo_root):
        git_repo.git.checkout("-b", "unmerged")
        make_commit(git_repo, "u.txt", "u\n", "Unmerged")
        git_repo.git.checkout("main")

        with pytest.raises(ConflictError):
            ops.delete_branch(repo_root, "unmerged", force=False)

        ops.delete_branch(repo_root, "unmerged", force=True)
        assert not ops.branch_exists(repo_root, "unmerged")

    def test_unclassified_failure_is_a_git_error(self, ops, repo_root):
        with pytest.raises(GitOperationError):
            ops.push(repo_root, "main")

    def test_default_remote_head_without_remote(self, ops, repo_root):
        with pytest.raises(GitOperationError):
            ops.default_remote_head(repo_root)

    def test_default_remote_head_in_clone(self, ops, cloned_repo):
        assert ops.default_remote_head(cloned_repo.working_tree_dir) == "main"

    def test_custom_remote_name(self, cloned_repo):
        cloned_repo.git.remote("rename", "origin", "upstream")
        ops = GitOperations(remote_name="upstream")

        assert ops.remote_branch_exists(cloned_repo.working_tree_dir, "main")

    def test_not_a_repository(self, ops, temp_dir):
        with pytest.raises(NotARepositoryError, match="not a git repository"):
            ops.show_toplevel(temp_dir)

    def test_merge_abort_never_raises(self, ops, repo_root):
        ops.merge_abort(repo_root)

    def test_errors_are_classified_once(self, ops, repo_root):
        failing = Mock()
        failing.execute.side_effect = git.exc.GitCommandError(
            ["git", "worktree", "remove"], 128, stderr="fatal: '/x' contains modified or untracked files"
        )
        with patch.object(ops, "_git", return_value=failing):
            with pytest.raises(ConflictError) as exc_info:
                ops.remove_worktree(repo_root, repo_root / "x", force=False)

        assert "contains modified or untracked files" in exc_info.value.message
        assert "stderr:" not in exc_info.value.message

    def test_is_ancestor(self, ops, git_repo, repo_root):
        git_repo.git.branch("behind")
        git_repo.git.checkout("-b", "ahead")
        make_commit(git_repo, "ahead.txt", "ahead\n", "Ahead")
        git_repo.git.checkout("main")

        assert ops.is_ancestor(repo_root, "behind", "main")
        assert not ops.is_ancestor(repo_root, "ahead", "main")
        assert not ops.is_ancestor(repo_root, "no-such-branch", "main")

    def test_is_ancestor_outside_a_repository(self, ops, temp_dir):
        assert ops.is_ancestor(temp_dir, "feature", "main") is False


@pytest.fixture
def hook_repo(temp_dir):
    """A second repository whose GIT_DIR a calling git hook would export."""
    repo = git.Repo.init(temp_dir / "hook_repo")
    configure_user(repo)
    make_commit(repo, "hook.txt", "hook\n", "Hook repo commit")
    repo.git.branch("-M", "hookrepo")
    repo.close()
    return temp_dir / "hook_repo"


class TestInheritedGitEnvironment:
    def test_git_calls_ignore_inherited_git_dir(self, ops, repo_root, hook_repo, monkeypatch):
        monkeypatch.setenv("GIT_DIR", str(hook_repo / ".git"))
        monkeypatch.setenv("GIT_WORK_TREE", str(hook_repo))

        assert ops.show_toplevel(repo_root) == repo_root
        assert "GIT_DIR" not in os.environ
        assert "GIT_WORK_TREE" not in os.environ

    def test_keeper_uses_its_own_repository(self, repo_root, hook_repo, monkeypatch):
        monkeypatch.setenv("GIT_DIR", str(hook_repo / ".git"))

        keeper = WorktreeKeeper(repo_root)

        assert keeper.repo_root == repo_root
        assert [wt.branch for wt in keeper.list_worktrees()] == ["main"]
        assert keeper.resolve_mainline() == "main"
