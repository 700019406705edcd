"""Data models for git-worktree-keeper."""

from .branch import BranchName, slugify, hash8, to_directory_name
from .worktree import (
    WorktreeEntry,
    IntegrationMethod,
    IntegrationState,
    IntegrationStatus,
    NOT_INTEGRATED,
    NO_BRANCH,
    AddResult,
    GoResult,
    RemoveResult,
    PruneEntry,
    PruneDryRun,
    PrunedEntry,
    SkippedEntry,
    PruneExecuteResult,
    MergeResult,
    DiagLevel,
    Diagnostic,
)

__all__ = [
    "BranchName",
    "slugify",
    "hash8",
    "to_directory_name",
    "WorktreeEntry",
    "IntegrationMethod",
    "IntegrationState",
    "IntegrationStatus",
    "NOT_INTEGRATED",
    "NO_BRANCH",
    "AddResult",
    "GoResult",
    "RemoveResult",
    "PruneEntry",
    "PruneDryRun",
    "PrunedEntry",
    "SkippedEntry",
    "PruneExecuteResult",
    "MergeResult",
    "DiagLevel",
    "Diagnostic",
]
