"""Add, go, list and remove operations for managed worktrees"""
from pathlib import Path
from typing import List, Optional

from git_worktree_keeper.exceptions import (
    ConflictError,
    GitOperationError,
    InvariantViolationError,
    WorktreeKeeperError,
)
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.branch import BranchName
from git_worktree_keeper.models.worktree import AddResult, GoResult, RemoveResult, WorktreeEntry
from git_worktree_keeper.services.git.interface import GitCommands
from git_worktree_keeper.services.git.worktrees import WorktreeCatalog

logger = get_logger(__name__)


class LifecycleService:
    """Per-command business rules for creating, finding and removing worktrees."""

    def __init__(self, git_commands: GitCommands, catalog: WorktreeCatalog):
        self.git = git_commands
        self.catalog = catalog
        self.repo_root = catalog.repo_root

    def list(self) -> List[WorktreeEntry]:
        return self.catalog.list_worktrees()

    def add(self, branch: BranchName, base: Optional[str] = None) -> AddResult:
        """Create a new worktree and branch.

        When no base is given and ``<remote>/<branch>`` exists, the new
        branch is created from the remote branch and set to track it.
        Otherwise a fresh branch is created from ``base`` (HEAD by default).

        Every check runs before anything is created.

        Raises:
            ConflictError: the branch or the target directory already exists
            GitOperationError: ``base`` does not resolve to a commit
        """
        if self.git.branch_exists(self.repo_root, branch.name):
            raise ConflictError(f"branch '{branch}' already exists")

        if base is not None and not self.git.rev_exists(self.repo_root, base):
            raise GitOperationError(f"revision '{base}' not found")

        wt_dir = self.catalog.worktree_path_for(branch)
        if wt_dir.exists():
            raise ConflictError(f"worktree directory already exists: {wt_dir}")

        tracking = base is None and self.git.remote_branch_exists(self.repo_root, branch.name)
        if tracking:
            effective_base = f"{self.git.remote_name}/{branch.name}"
            logger.debug(f"Branch {branch} exists on {self.git.remote_name}, tracking it")
        else:
            effective_base = base

        self.git.add_worktree(self.repo_root, wt_dir, branch.name, effective_base)

        # So that pull/push work without arguments
        if tracking:
            self.git.set_upstream(self.repo_root, branch.name)

        return AddResult(
            worktree_path=wt_dir,
            branch=branch,
            repo_root=self.repo_root,
            tracking=tracking,
        )

    def go(self, branch: BranchName) -> GoResult:
        """Resolve the path of the existing worktree for ``branch``."""
        worktrees = self.catalog.list_worktrees()
        wt = self.catalog.find_by_branch(worktrees, branch)
        return GoResult(worktree_path=wt.path, branch=branch, repo_root=self.repo_root)

    def remove(
        self,
        branch: Optional[BranchName] = None,
        force: bool = False,
        cwd: Optional[Path] = None,
    ) -> RemoveResult:
        """Remove a worktree, then delete its local branch.

        Args:
            branch: Branch to remove; inferred from ``cwd`` when None
            force: Remove a dirty worktree and delete the branch with -D
            cwd: Caller's working directory, used only for inference

        Returns:
            RemoveResult; ``warning`` is set when the branch could not be
            deleted after the worktree was already removed

        Raises:
            UsageError: no target branch, or no worktree for it
            InvariantViolationError: the target is the main worktree
        """
        worktrees = self.catalog.list_worktrees()
        target = self.catalog.resolve_target_branch(worktrees, branch, cwd)
        wt = self.catalog.find_by_branch(worktrees, target)

        # No override, not even with force
        if wt.is_main:
            raise InvariantViolationError("refusing to remove the main worktree")

        self.git.remove_worktree(self.repo_root, wt.path, force)

        warning = None
        try:
            self.git.delete_branch(self.repo_root, target.name, force)
        except WorktreeKeeperError as e:
            warning = f"worktree removed but branch deletion failed: {e}"
            logger.warning(warning)

        return RemoveResult(
            removed_path=wt.path,
            branch=target,
            repo_root=self.repo_root,
            warning=warning,
        )
