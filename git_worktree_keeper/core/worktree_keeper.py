"""Core functionality for git-worktree-keeper"""

from pathlib import Path
from typing import List, Optional, Union

from git_worktree_keeper.config import Config
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.branch import BranchName
from git_worktree_keeper.models.worktree import (
    AddResult,
    Diagnostic,
    GoResult,
    MergeResult,
    PruneDryRun,
    PruneExecuteResult,
    RemoveResult,
    WorktreeEntry,
)
from git_worktree_keeper.services.doctor_service import DoctorService
from git_worktree_keeper.services.git import GitCommands, GitOperations, MergeDetector, WorktreeCatalog
from git_worktree_keeper.services.git.worktrees import resolve_repo_root
from git_worktree_keeper.services.lifecycle_service import LifecycleService
from git_worktree_keeper.services.merge_service import MergeService
from git_worktree_keeper.services.prune_service import MainlineResolver, PruneService

logger = get_logger(__name__)


def _as_branch(branch: Union[BranchName, str, None]) -> Optional[BranchName]:
    if branch is None or isinstance(branch, BranchName):
        return branch
    return BranchName(branch)


class WorktreeKeeper:
    """Entry point for worktree operations on one repository.

    Build one instance per invocation. The repository root is resolved once
    at construction; every operation re-reads worktree state from git.
    """

    def __init__(
        self,
        start_path: Union[str, Path],
        config: Union[Config, dict, None] = None,
        git_commands: Optional[GitCommands] = None,
    ):
        """Initialize WorktreeKeeper.

        Args:
            start_path: Any path inside the repository or one of its worktrees
            config: Configuration dict or Config object
            git_commands: Git primitives (defaults to GitOperations)

        Raises:
            NotARepositoryError: start_path is not inside a git repository
        """
        if config is None:
            config = Config()
        elif isinstance(config, dict):
            config = Config.from_dict(config)
        self.config = config

        self.git = git_commands or GitOperations(remote_name=config.remote_name)
        self.repo_root = resolve_repo_root(self.git, Path(start_path))
        logger.debug(f"Repository root: {self.repo_root}")

        # Initialize services
        self.catalog = WorktreeCatalog(self.git, self.repo_root, config.worktrees_dir_name)
        self.merge_detector = MergeDetector(self.git, self.repo_root)
        self.mainline_resolver = MainlineResolver(self.git, self.catalog, config.mainline_candidates)
        self.lifecycle = LifecycleService(self.git, self.catalog)
        self.prune_service = PruneService(self.git, self.catalog, self.mainline_resolver, self.merge_detector)
        self.merge_service = MergeService(self.git, self.catalog, self.mainline_resolver, self.lifecycle)
        self.doctor_service = DoctorService(self.catalog)

    def list_worktrees(self) -> List[WorktreeEntry]:
        return self.lifecycle.list()

    def add(self, branch: Union[BranchName, str], base: Optional[str] = None) -> AddResult:
        return self.lifecycle.add(_as_branch(branch), base)

    def go(self, branch: Union[BranchName, str]) -> GoResult:
        return self.lifecycle.go(_as_branch(branch))

    def remove(
        self,
        branch: Union[BranchName, str, None] = None,
        force: bool = False,
        cwd: Optional[Path] = None,
    ) -> RemoveResult:
        return self.lifecycle.remove(_as_branch(branch), force=force, cwd=cwd)

    def resolve_mainline(self, override: Optional[str] = None) -> str:
        return self.mainline_resolver.resolve(override)

    def prune_dry_run(self, mainline: Optional[str] = None) -> PruneDryRun:
        return self.prune_service.dry_run(mainline)

    def prune_execute(self, mainline: Optional[str] = None, force: bool = False) -> PruneExecuteResult:
        return self.prune_service.execute(mainline, force=force)

    def merge(
        self,
        branch: Union[BranchName, str, None] = None,
        push: bool = False,
        no_cleanup: bool = False,
        cwd: Optional[Path] = None,
    ) -> MergeResult:
        return self.merge_service.merge(_as_branch(branch), push=push, no_cleanup=no_cleanup, cwd=cwd)

    def doctor(self) -> List[Diagnostic]:
        return self.doctor_service.run()
