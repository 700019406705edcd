"""Merge detection service for git-worktree-keeper."""

from pathlib import Path
from typing import Callable, List, Optional, Tuple

from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.worktree import NO_BRANCH, NOT_INTEGRATED, IntegrationMethod, IntegrationStatus
from git_worktree_keeper.services.git.interface import GitCommands

logger = get_logger(__name__)


class MergeDetector:
    """Service for detecting if branches have been integrated into a mainline.

    Two independent strategies are tried in order and the first match wins:

    1. ancestor check: the branch tip is reachable from the mainline
       (ordinary merge or fast-forward);
    2. patch-id check (``git cherry``): every commit of the branch has an
       equivalent patch in the mainline (rebase or cherry-pick merge).

    Squash merges fold several commits into one new patch that matches none
    of the originals, so squashed branches are reported as not integrated.

    Results are never cached: the mainline can move between two calls.
    """

    def __init__(self, git_commands: GitCommands, repo_root: Path):
        """Initialize the merge detector.

        Args:
            git_commands: Git primitives to query
            repo_root: Root of the main worktree
        """
        self.git = git_commands
        self.repo_root = repo_root
        # Counters for merge detection methods
        self.merge_detection_stats = {
            "method1": 0,  # Ancestor check
            "method2": 0,  # Patch-id (cherry) check
        }

        logger.debug("Merge detector initialized")

    def get_merge_stats(self) -> str:
        """Get a summary of which methods detected merges."""
        total = sum(self.merge_detection_stats.values())
        if total == 0:
            return "No merges detected"

        method_names = {
            "method1": "Ancestor check",
            "method2": "Patch-id check",
        }
        stats = [
            f"{method_names[method]}: {count}"
            for method, count in self.merge_detection_stats.items()
            if count > 0
        ]
        return f"Merges detected by: {', '.join(stats)}"

    def classify(self, branch_name: str, main_branch: str) -> IntegrationStatus:
        """Classify a branch against the mainline, fastest method first."""
        methods: List[Tuple[Callable[[str, str], bool], IntegrationMethod]] = [
            (self._check_ancestor, IntegrationMethod.MERGED),
            (self._check_cherry, IntegrationMethod.REBASE),
        ]

        for check, method in methods:
            if check(branch_name, main_branch):
                return IntegrationStatus.integrated(method)

        logger.debug(f"Branch {branch_name} is not integrated into {main_branch}")
        return NOT_INTEGRATED

    def classify_worktree_branch(self, branch_name: Optional[str], main_branch: str) -> IntegrationStatus:
        """Like classify, but a worktree without a branch (detached HEAD) is NO_BRANCH."""
        if branch_name is None:
            return NO_BRANCH
        return self.classify(branch_name, main_branch)

    def _check_ancestor(self, branch_name: str, main_branch: str) -> bool:
        """Method 1: Check if branch tip is ancestor of main."""
        logger.debug("[Method 1] Checking if branch tip is ancestor...")
        if self.git.is_ancestor(self.repo_root, branch_name, main_branch):
            logger.debug(f"[Method 1] Branch {branch_name} is merged (tip is ancestor)")
            self.merge_detection_stats["method1"] += 1
            return True
        return False

    def _check_cherry(self, branch_name: str, main_branch: str) -> bool:
        """Method 2: Check that every patch of the branch already exists in main."""
        logger.debug("[Method 2] Checking patch equivalence with git cherry...")
        if self.git.cherry(self.repo_root, main_branch, branch_name):
            logger.debug(f"[Method 2] Branch {branch_name} is integrated (all patches in {main_branch})")
            self.merge_detection_stats["method2"] += 1
            return True
        return False
