"""Pytest fixtures for git-worktree-keeper tests"""
import tempfile
from pathlib import Path

import git
import pytest

from fakes import FakeGitCommands
from helpers import configure_user, make_commit
from git_worktree_keeper.core import WorktreeKeeper


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository on branch main with one commit."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)
    configure_user(repo)

    make_commit(repo, "README.md", "# Test Repository\n", "Initial commit")
    repo.git.branch("-M", "main")

    yield repo

    repo.close()


@pytest.fixture
def repo_root(git_repo):
    return Path(git_repo.working_tree_dir)


@pytest.fixture
def keeper(repo_root):
    return WorktreeKeeper(repo_root)


@pytest.fixture
def cloned_repo(temp_dir):
    """Clone of a bare origin, so remote-tracking branches and push work.

    The clone's origin/HEAD points at main.
    """
    seed_path = temp_dir / "seed"
    seed = git.Repo.init(seed_path)
    configure_user(seed)
    make_commit(seed, "README.md", "# Seed\n", "Initial commit")
    seed.git.branch("-M", "main")

    origin_path = temp_dir / "origin.git"
    origin = git.Repo.clone_from(str(seed_path), str(origin_path), bare=True)

    clone = git.Repo.clone_from(str(origin_path), str(temp_dir / "clone"))
    configure_user(clone)

    yield clone

    clone.close()
    origin.close()
    seed.close()


@pytest.fixture
def fake_root(temp_dir):
    root = temp_dir / "fake_repo"
    root.mkdir()
    return root


@pytest.fixture
def fake_git(fake_root):
    """In-memory git with a main worktree on branch main."""
    return FakeGitCommands(fake_root)


@pytest.fixture
def fake_keeper(fake_root, fake_git):
    return WorktreeKeeper(fake_root, git_commands=fake_git)
