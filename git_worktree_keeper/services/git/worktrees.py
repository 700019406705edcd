"""Worktree catalog for git-worktree-keeper."""

from pathlib import Path
from typing import List, Optional

from git_worktree_keeper.constants import WORKTREES_DIR_NAME
from git_worktree_keeper.exceptions import UsageError, WorktreeKeeperError
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.branch import BranchName
from git_worktree_keeper.models.worktree import WorktreeEntry
from git_worktree_keeper.services.git.interface import GitCommands
from git_worktree_keeper.services.git.porcelain import parse_worktree_porcelain

logger = get_logger(__name__)


def resolve_repo_root(git_commands: GitCommands, start: Path) -> Path:
    """Resolve the main repository root from a starting path.

    From inside a linked worktree the toplevel is the linked checkout, so the
    root is taken as the parent of the shared metadata directory
    (``--git-common-dir``) instead.

    Args:
        git_commands: Git primitives
        start: Any path inside the repository or one of its worktrees

    Returns:
        Absolute path of the main worktree

    Raises:
        NotARepositoryError: start is not inside a git repository
    """
    start = Path(start)
    toplevel = git_commands.show_toplevel(start)
    try:
        common = git_commands.common_dir(start)
    except WorktreeKeeperError as e:
        logger.debug(f"Could not read common git dir from {start}: {e}; using toplevel")
        return toplevel

    root = common.parent
    logger.debug(f"Resolved repository root {root} (toplevel {toplevel})")
    return root


def resolve_branch_from_cwd(worktrees: List[WorktreeEntry], cwd: Path) -> BranchName:
    """Infer the branch of the worktree containing ``cwd``.

    The worktree with the longest path that contains cwd wins, so a linked
    worktree nested under the main checkout is preferred over the main one.

    Raises:
        UsageError: cwd is outside every worktree, or that worktree is detached
    """
    cwd = Path(cwd).resolve()
    containing = [wt for wt in worktrees if _is_within(cwd, wt.path)]
    if not containing:
        raise UsageError("no branch specified and cwd is not inside a worktree")

    found = max(containing, key=lambda wt: len(wt.path.parts))
    if found.branch is None:
        raise UsageError("current worktree has no branch")
    return BranchName(found.branch)


def _is_within(path: Path, parent: Path) -> bool:
    """Component-wise prefix test (``/a/bc`` is not inside ``/a/b``)."""
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


class WorktreeCatalog:
    """Reads the worktrees registered for one repository.

    Nothing is cached: other processes may add or remove worktrees at any
    time, so every call re-reads the listing from git.
    """

    def __init__(self, git_commands: GitCommands, repo_root: Path, worktrees_dir_name: str = WORKTREES_DIR_NAME):
        """Initialize the catalog.

        Args:
            git_commands: Git primitives
            repo_root: Root of the main worktree
            worktrees_dir_name: Convention directory under the root
        """
        self.git = git_commands
        self.repo_root = Path(repo_root)
        self.worktrees_dir = self.repo_root / worktrees_dir_name

    def worktree_path_for(self, branch: BranchName) -> Path:
        """Target directory of the managed worktree for ``branch``."""
        return self.worktrees_dir / branch.to_dir_name()

    def list_worktrees(self) -> List[WorktreeEntry]:
        """Get information about all worktrees, main worktree first.

        Returns:
            List of WorktreeEntry objects (bare entries excluded)
        """
        # Stale registrations would otherwise show up as worktrees
        try:
            self.git.prune_worktrees(self.repo_root)
        except WorktreeKeeperError as e:
            logger.debug(f"Could not prune worktree metadata: {e}")

        raw = self.git.list_worktrees_raw(self.repo_root)
        worktrees = parse_worktree_porcelain(raw)

        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    @staticmethod
    def find_by_branch(worktrees: List[WorktreeEntry], branch: BranchName) -> WorktreeEntry:
        """Find the worktree checked out on exactly ``branch``.

        Raises:
            UsageError: no worktree has that branch
        """
        for wt in worktrees:
            if wt.branch == branch.name:
                return wt
        raise UsageError(f"no worktree found for branch '{branch}'")

    @staticmethod
    def main_worktree(worktrees: List[WorktreeEntry]) -> Optional[WorktreeEntry]:
        return next((wt for wt in worktrees if wt.is_main), None)

    def resolve_target_branch(
        self, worktrees: List[WorktreeEntry], branch: Optional[BranchName], cwd: Optional[Path]
    ) -> BranchName:
        """Explicit branch if given, otherwise the branch of the worktree containing cwd."""
        if branch is not None:
            return branch
        if cwd is None:
            raise UsageError("no branch specified and cwd is not inside a worktree")
        return resolve_branch_from_cwd(worktrees, cwd)
