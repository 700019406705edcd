"""Git-related services for git-worktree-keeper."""

from .interface import GitCommands
from .operations import GitOperations, scrub_git_environment
from .worktrees import WorktreeCatalog, resolve_repo_root, resolve_branch_from_cwd
from .merge_detector import MergeDetector
from .porcelain import parse_worktree_porcelain

__all__ = [
    "GitCommands",
    "GitOperations",
    "scrub_git_environment",
    "WorktreeCatalog",
    "resolve_repo_root",
    "resolve_branch_from_cwd",
    "MergeDetector",
    "parse_worktree_porcelain",
]
