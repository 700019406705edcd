"""Worktree data models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from git_worktree_keeper.constants import DETACHED_LABEL
from git_worktree_keeper.models.branch import BranchName


@dataclass
class WorktreeEntry:
    """A worktree as reported by ``git worktree list``."""

    path: Path
    branch: Optional[str]
    commit: str  # abbreviated HEAD commit
    is_main: bool  # first entry of the listing

    @property
    def is_detached(self) -> bool:
        return self.branch is None

    def __str__(self) -> str:
        """String representation of worktree."""
        main_marker = " (main)" if self.is_main else ""
        return f"{self.branch or DETACHED_LABEL} @ {self.path}{main_marker} [{self.commit}]"


class IntegrationMethod(Enum):
    """How a branch was found to be integrated into the mainline."""
    MERGED = "merged"  # ancestor of mainline (merge or fast-forward)
    REBASE = "rebase"  # every patch has an equivalent in mainline


class IntegrationState(Enum):
    INTEGRATED = "integrated"
    NOT_INTEGRATED = "not_integrated"
    NO_BRANCH = "no_branch"


@dataclass(frozen=True)
class IntegrationStatus:
    """Integration status of one worktree branch against the mainline."""

    state: IntegrationState
    method: Optional[IntegrationMethod] = None

    @classmethod
    def integrated(cls, method: IntegrationMethod) -> "IntegrationStatus":
        return cls(IntegrationState.INTEGRATED, method)

    @property
    def is_integrated(self) -> bool:
        return self.state is IntegrationState.INTEGRATED

    def __str__(self) -> str:
        if self.method is not None:
            return f"{self.state.value} ({self.method.value})"
        return self.state.value


NOT_INTEGRATED = IntegrationStatus(IntegrationState.NOT_INTEGRATED)
NO_BRANCH = IntegrationStatus(IntegrationState.NO_BRANCH)


@dataclass
class AddResult:
    worktree_path: Path
    branch: BranchName
    repo_root: Path
    tracking: bool  # created from <remote>/<branch> with upstream set


@dataclass
class GoResult:
    worktree_path: Path
    branch: BranchName
    repo_root: Path


@dataclass
class RemoveResult:
    removed_path: Path
    branch: BranchName
    repo_root: Path
    warning: Optional[str] = None  # branch deletion failed after the worktree was removed


@dataclass
class PruneEntry:
    path: Path
    branch: Optional[str]
    status: IntegrationStatus


@dataclass
class PruneDryRun:
    mainline: str
    entries: List[PruneEntry] = field(default_factory=list)

    @property
    def prunable(self) -> int:
        return sum(1 for entry in self.entries if entry.status.is_integrated)


@dataclass
class PrunedEntry:
    branch: str
    path: Path


@dataclass
class SkippedEntry:
    branch: Optional[str]
    path: Path
    reason: str


@dataclass
class PruneExecuteResult:
    mainline: str
    pruned: List[PrunedEntry] = field(default_factory=list)
    skipped: List[SkippedEntry] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class MergeResult:
    branch: BranchName
    mainline: str
    repo_root: Path
    cleaned_up: bool
    removed_path: Optional[Path]  # only set when cleaned_up
    pushed: bool
    warnings: List[str] = field(default_factory=list)


class DiagLevel(Enum):
    OK = "ok"
    WARN = "warn"
    ERROR = "error"


@dataclass
class Diagnostic:
    """One finding of the doctor command."""
    level: DiagLevel
    message: str
