"""Mainline resolution and pruning of integrated worktrees"""
from typing import List, Optional

from git_worktree_keeper.constants import (
    MAINLINE_CANDIDATES,
    SKIP_NO_BRANCH,
    SKIP_NOT_INTEGRATED,
    SKIP_REMOVAL_FAILED,
)
from git_worktree_keeper.exceptions import GitOperationError, UsageError, WorktreeKeeperError
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.worktree import (
    IntegrationMethod,
    IntegrationState,
    PruneDryRun,
    PruneEntry,
    PruneExecuteResult,
    PrunedEntry,
    SkippedEntry,
)
from git_worktree_keeper.services.git.interface import GitCommands
from git_worktree_keeper.services.git.merge_detector import MergeDetector
from git_worktree_keeper.services.git.worktrees import WorktreeCatalog

logger = get_logger(__name__)


class MainlineResolver:
    """Works out which branch is the integration target."""

    def __init__(self, git_commands: GitCommands, catalog: WorktreeCatalog, candidates: Optional[List[str]] = None):
        self.git = git_commands
        self.catalog = catalog
        self.repo_root = catalog.repo_root
        self.candidates = list(candidates or MAINLINE_CANDIDATES)

    def resolve(self, override: Optional[str] = None) -> str:
        """Resolve the mainline branch.

        Resolution order:

        1. ``override``, which must exist
        2. the remote's symbolic HEAD (``origin/HEAD``)
        3. the first local branch among the configured candidates (main, master)
        4. the branch checked out in the main worktree

        Raises:
            UsageError: override does not exist
            GitOperationError: nothing above yields a branch
        """
        if override is not None:
            if not self.git.rev_exists(self.repo_root, override):
                raise UsageError(f"mainline branch '{override}' does not exist")
            return override

        try:
            mainline = self.git.default_remote_head(self.repo_root)
            logger.debug(f"Mainline {mainline} from {self.git.remote_name}/HEAD")
            return mainline
        except WorktreeKeeperError as e:
            logger.debug(f"No {self.git.remote_name}/HEAD: {e}")

        for candidate in self.candidates:
            if self.git.branch_exists(self.repo_root, candidate):
                logger.debug(f"Mainline {candidate} from local branch")
                return candidate

        main_wt = self.catalog.main_worktree(self.catalog.list_worktrees())
        if main_wt is not None and main_wt.branch:
            logger.debug(f"Mainline {main_wt.branch} from main worktree")
            return main_wt.branch

        raise GitOperationError("could not determine mainline branch; use --mainline to specify")


class PruneService:
    """Finds and removes worktrees whose branches are already in the mainline."""

    def __init__(
        self,
        git_commands: GitCommands,
        catalog: WorktreeCatalog,
        mainline_resolver: MainlineResolver,
        merge_detector: MergeDetector,
    ):
        self.git = git_commands
        self.catalog = catalog
        self.repo_root = catalog.repo_root
        self.mainline_resolver = mainline_resolver
        self.merge_detector = merge_detector

    def dry_run(self, mainline: Optional[str] = None) -> PruneDryRun:
        """Classify every non-main worktree without removing anything."""
        resolved = self.mainline_resolver.resolve(mainline)
        worktrees = self.catalog.list_worktrees()

        entries = []
        for wt in worktrees:
            # Neither the main worktree nor a checkout of the mainline is a pruning target
            if wt.is_main or wt.branch == resolved:
                continue
            status = self.merge_detector.classify_worktree_branch(wt.branch, resolved)
            logger.debug(f"{wt.branch or wt.path}: {status}")
            entries.append(PruneEntry(path=wt.path, branch=wt.branch, status=status))

        logger.debug(self.merge_detector.get_merge_stats())
        return PruneDryRun(mainline=resolved, entries=entries)

    def execute(self, mainline: Optional[str] = None, force: bool = False) -> PruneExecuteResult:
        """Remove integrated worktrees and their branches.

        Entries are independent: a failure on one is recorded and the batch
        continues.

        Args:
            mainline: Mainline override
            force: Remove dirty worktrees and delete branches with -D
        """
        plan = self.dry_run(mainline)
        result = PruneExecuteResult(mainline=plan.mainline)

        for entry in plan.entries:
            state = entry.status.state
            if state is IntegrationState.INTEGRATED:
                self._prune_integrated_entry(entry, force, result)
            elif state is IntegrationState.NOT_INTEGRATED:
                result.skipped.append(SkippedEntry(branch=entry.branch, path=entry.path, reason=SKIP_NOT_INTEGRATED))
            else:
                result.skipped.append(SkippedEntry(branch=None, path=entry.path, reason=SKIP_NO_BRANCH))

        return result

    def _prune_integrated_entry(self, entry: PruneEntry, force: bool, result: PruneExecuteResult) -> None:
        """Remove one integrated worktree and its branch.

        git's own ``branch -d`` trusts only ancestry, so it refuses branches
        integrated by rebase. The patch-id check already established that, so
        deletion escalates to -D for them.
        """
        branch_name = entry.branch
        force_branch = force or entry.status.method is IntegrationMethod.REBASE

        try:
            self.git.remove_worktree(self.repo_root, entry.path, force)
        except WorktreeKeeperError as e:
            warning = f"failed to remove worktree for '{branch_name}': {e}"
            logger.warning(warning)
            result.warnings.append(warning)
            result.skipped.append(SkippedEntry(branch=branch_name, path=entry.path, reason=SKIP_REMOVAL_FAILED))
            return

        try:
            self.git.delete_branch(self.repo_root, branch_name, force_branch)
        except WorktreeKeeperError as e:
            warning = f"worktree removed but branch deletion failed for '{branch_name}': {e}"
            logger.warning(warning)
            result.warnings.append(warning)

        result.pruned.append(PrunedEntry(branch=branch_name, path=entry.path))
