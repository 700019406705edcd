"""Helpers for building real git repositories in tests."""
from pathlib import Path

import git


def configure_user(repo: git.Repo) -> None:
    writer = repo.config_writer()
    writer.set_value("user", "name", "Test User")
    writer.set_value("user", "email", "test@example.com")
    writer.release()


def make_commit(repo: git.Repo, filename: str, content: str, message: str) -> str:
    """Write a file in the repo's working tree and commit it; returns the sha."""
    path = Path(repo.working_tree_dir) / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    repo.git.add(filename)
    repo.git.commit("-m", message)
    return repo.git.rev_parse("HEAD")


def tracked_status(repo: git.Repo) -> str:
    """Porcelain status ignoring untracked files (.worktrees/ is untracked)."""
    return repo.git.status("--porcelain", "--untracked-files=no")


def local_branches(repo: git.Repo) -> list:
    return [head.name for head in repo.heads]
