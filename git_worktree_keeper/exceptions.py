"""Custom exceptions for git-worktree-keeper"""

from enum import Enum


class ErrorKind(Enum):
    """Closed error taxonomy. The value is the process exit code."""

    USAGE = 1
    GIT = 2
    NOT_A_REPOSITORY = 3
    INVARIANT = 4
    CONFLICT = 5


class WorktreeKeeperError(Exception):
    """Base exception for all git-worktree-keeper errors."""

    kind = ErrorKind.GIT

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    @property
    def exit_code(self) -> int:
        return self.kind.value


class UsageError(WorktreeKeeperError):
    """The request cannot be satisfied (unknown branch, cwd outside any worktree...)."""

    kind = ErrorKind.USAGE


class GitOperationError(WorktreeKeeperError):
    """A git command failed for a reason that is not otherwise classified."""

    kind = ErrorKind.GIT


class NotARepositoryError(WorktreeKeeperError):
    """The starting path is not inside a git repository."""

    kind = ErrorKind.NOT_A_REPOSITORY


class InvariantViolationError(WorktreeKeeperError):
    """The operation would break a hard safety rule."""

    kind = ErrorKind.INVARIANT


class ConflictError(WorktreeKeeperError):
    """Repository state prevents the operation (dirty tree, existing branch, conflicts)."""

    kind = ErrorKind.CONFLICT


# Substrings of git stderr that indicate a state conflict rather than a failure
CONFLICT_MARKERS = (
    "unmerged",
    "modified",
    "dirty",
    "already exists",
    "already checked out",
    "is not fully merged",
)


def classify_git_error(message: str) -> WorktreeKeeperError:
    """Map raw git failure text to an error of the right kind.

    Matching is substring based on the lowercased text so that small wording
    changes between git versions do not change the classification.

    Args:
        message: stderr (or equivalent) text of the failed git command

    Returns:
        NotARepositoryError, ConflictError or GitOperationError carrying the
        original message
    """
    lower = message.lower()

    if "not a git repository" in lower:
        return NotARepositoryError(message)

    if any(marker in lower for marker in CONFLICT_MARKERS):
        return ConflictError(message)

    return GitOperationError(message)
