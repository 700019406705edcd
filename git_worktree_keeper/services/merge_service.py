"""Merge a worktree branch into the mainline, then clean up and push"""
from pathlib import Path
from typing import Optional

from git_worktree_keeper.constants import DETACHED_LABEL
from git_worktree_keeper.exceptions import ConflictError, InvariantViolationError, WorktreeKeeperError
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.branch import BranchName
from git_worktree_keeper.models.worktree import MergeResult
from git_worktree_keeper.services.git.interface import GitCommands
from git_worktree_keeper.services.git.worktrees import WorktreeCatalog
from git_worktree_keeper.services.lifecycle_service import LifecycleService
from git_worktree_keeper.services.prune_service import MainlineResolver

logger = get_logger(__name__)


class MergeService:
    """Merge, cleanup and push as one operation with partial-failure reporting."""

    def __init__(
        self,
        git_commands: GitCommands,
        catalog: WorktreeCatalog,
        mainline_resolver: MainlineResolver,
        lifecycle: LifecycleService,
    ):
        self.git = git_commands
        self.catalog = catalog
        self.repo_root = catalog.repo_root
        self.mainline_resolver = mainline_resolver
        self.lifecycle = lifecycle

    def merge(
        self,
        branch: Optional[BranchName] = None,
        push: bool = False,
        no_cleanup: bool = False,
        cwd: Optional[Path] = None,
    ) -> MergeResult:
        """Merge a worktree's branch into the mainline.

        1. Resolve the branch (argument or cwd) and refuse the main worktree
        2. Resolve the mainline and require the main worktree to be on it
        3. ``merge --no-ff`` from the main worktree; on failure abort and raise
        4. Unless ``no_cleanup``, remove the worktree and branch
        5. If ``push``, push the mainline

        Once the merge commit exists, failures in steps 4 and 5 are reported
        as warnings on the result instead of errors.

        Raises:
            UsageError: no target branch, or no worktree for it
            InvariantViolationError: target is the main worktree, or the main
                worktree is not on the mainline
            ConflictError: the merge failed and was aborted
        """
        worktrees = self.catalog.list_worktrees()
        target = self.catalog.resolve_target_branch(worktrees, branch, cwd)
        wt = self.catalog.find_by_branch(worktrees, target)

        if wt.is_main:
            raise InvariantViolationError("refusing to merge the main worktree")

        mainline = self.mainline_resolver.resolve()
        main_wt = self.catalog.main_worktree(worktrees)
        main_branch = main_wt.branch if main_wt is not None else None
        # Never switch branches on the caller's behalf
        if main_branch != mainline:
            raise InvariantViolationError(
                f"main worktree is on '{main_branch or DETACHED_LABEL}', expected '{mainline}'; "
                "checkout mainline first"
            )

        try:
            self.git.merge_no_ff(self.repo_root, target.name)
        except WorktreeKeeperError as e:
            self.git.merge_abort(self.repo_root)
            raise ConflictError(
                f"merge conflicts with '{target}'; merge aborted, resolve manually with git merge\n{e}"
            ) from e

        warnings = []

        cleaned_up = False
        removed_path = None
        if not no_cleanup:
            try:
                removal = self.lifecycle.remove(target, force=False)
            except WorktreeKeeperError as e:
                warning = f"merge succeeded but cleanup failed: {e}"
                logger.warning(warning)
                warnings.append(warning)
            else:
                if removal.warning:
                    warnings.append(removal.warning)
                cleaned_up = True
                removed_path = removal.removed_path

        pushed = False
        if push:
            try:
                self.git.push(self.repo_root, mainline)
                pushed = True
            except WorktreeKeeperError as e:
                warning = f"merge succeeded but push failed: {e}"
                logger.warning(warning)
                warnings.append(warning)

        return MergeResult(
            branch=target,
            mainline=mainline,
            repo_root=self.repo_root,
            cleaned_up=cleaned_up,
            removed_path=removed_path,
            pushed=pushed,
            warnings=warnings,
        )
