"""Abstract interface for the git primitives the worktree engine consumes.

The lifecycle, prune, merge and doctor services only talk to git through
this interface. ``GitOperations`` implements it by running git through
GitPython; tests use an in-memory fake.

Conventions for implementations:

- commands that mutate state raise a ``WorktreeKeeperError`` subclass that
  was produced by ``classify_git_error`` at the point where the raw git
  failure was seen;
- boolean queries never raise, a failed query answers ``False``.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional


class GitCommands(ABC):
    """Primitive git operations used by git-worktree-keeper."""

    remote_name: str = "origin"

    # Repository resolution

    @abstractmethod
    def show_toplevel(self, start: Path) -> Path:
        """Top of the working tree containing ``start``.

        Raises:
            NotARepositoryError: start is not inside a git repository
        """
        ...

    @abstractmethod
    def common_dir(self, start: Path) -> Path:
        """Shared metadata directory (``--git-common-dir``), absolute."""
        ...

    # Worktrees

    @abstractmethod
    def prune_worktrees(self, root: Path) -> None:
        """Drop registrations of worktrees whose directories are gone."""
        ...

    @abstractmethod
    def list_worktrees_raw(self, root: Path) -> str:
        """Raw ``git worktree list --porcelain`` output."""
        ...

    @abstractmethod
    def add_worktree(self, root: Path, path: Path, branch: str, base: Optional[str]) -> None:
        """Create ``branch`` from ``base`` (HEAD when None) checked out at ``path``."""
        ...

    @abstractmethod
    def remove_worktree(self, root: Path, path: Path, force: bool) -> None:
        ...

    # Branches and revisions

    @abstractmethod
    def delete_branch(self, root: Path, branch: str, force: bool) -> None:
        """Delete a local branch; ``force`` skips git's own merged check."""
        ...

    @abstractmethod
    def branch_exists(self, root: Path, branch: str) -> bool:
        ...

    @abstractmethod
    def remote_branch_exists(self, root: Path, branch: str) -> bool:
        """True when ``<remote_name>/<branch>`` exists."""
        ...

    @abstractmethod
    def rev_exists(self, root: Path, rev: str) -> bool:
        ...

    @abstractmethod
    def set_upstream(self, root: Path, branch: str) -> None:
        """Make ``branch`` track ``<remote_name>/<branch>``."""
        ...

    # Ancestry

    @abstractmethod
    def is_ancestor(self, root: Path, branch: str, mainline: str) -> bool:
        """True when every commit reachable from ``branch`` is reachable from ``mainline``."""
        ...

    @abstractmethod
    def cherry(self, root: Path, mainline: str, branch: str) -> bool:
        """True when ``branch`` has commits and every one has an equivalent patch in ``mainline``."""
        ...

    @abstractmethod
    def default_remote_head(self, root: Path) -> str:
        """Branch the remote's symbolic HEAD points at, remote prefix stripped."""
        ...

    # Merge and publish

    @abstractmethod
    def merge_no_ff(self, root: Path, branch: str) -> None:
        ...

    @abstractmethod
    def merge_abort(self, root: Path) -> None:
        """Abort an in-progress merge; never raises."""
        ...

    @abstractmethod
    def push(self, root: Path, branch: str) -> None:
        ...
