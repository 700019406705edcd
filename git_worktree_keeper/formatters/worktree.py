"""Worktree, prune and diagnostic formatting utilities."""

from typing import Optional

from git_worktree_keeper.constants import (
    DETACHED_LABEL,
    SKIP_REASON_DISPLAY,
    SYMBOL_ERROR,
    SYMBOL_OK,
    SYMBOL_WARN,
)
from git_worktree_keeper.models.worktree import DiagLevel, IntegrationState, IntegrationStatus


def format_branch_label(branch: Optional[str]) -> str:
    """
    Format a worktree branch, or the detached marker when there is none.

    Args:
        branch: Branch name or None

    Returns:
        Display label
    """
    return branch if branch else DETACHED_LABEL


def format_integration_status(status: IntegrationStatus) -> str:
    """
    Format an integration status for human output.

    Returns:
        "integrated (merged)", "integrated (rebase)", "not integrated" or
        "no branch (detached HEAD)"
    """
    if status.state is IntegrationState.INTEGRATED:
        return f"integrated ({status.method.value})"
    if status.state is IntegrationState.NOT_INTEGRATED:
        return "not integrated"
    return "no branch (detached HEAD)"


def format_integration_symbol(status: IntegrationStatus) -> str:
    if status.state is IntegrationState.INTEGRATED:
        return SYMBOL_OK
    if status.state is IntegrationState.NOT_INTEGRATED:
        return SYMBOL_ERROR
    return SYMBOL_WARN


def format_skip_reason(reason: str) -> str:
    """Human text for a prune skip reason; unknown reasons pass through."""
    return SKIP_REASON_DISPLAY.get(reason, reason)


def format_diag_symbol(level: DiagLevel) -> str:
    return {
        DiagLevel.OK: SYMBOL_OK,
        DiagLevel.WARN: SYMBOL_WARN,
        DiagLevel.ERROR: SYMBOL_ERROR,
    }[level]


def pluralize(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"
