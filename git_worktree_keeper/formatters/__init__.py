"""Formatting utilities for git-worktree-keeper.

- worktree: labels and symbols for human output
- payloads: envelopes for --json output
"""

from .worktree import (
    format_branch_label,
    format_integration_status,
    format_integration_symbol,
    format_skip_reason,
    format_diag_symbol,
    pluralize,
)
from .payloads import (
    to_json,
    error_payload,
    list_payload,
    add_payload,
    go_payload,
    remove_payload,
    merge_payload,
    prune_dry_run_payload,
    prune_execute_payload,
    doctor_payload,
)

__all__ = [
    # Human
    "format_branch_label",
    "format_integration_status",
    "format_integration_symbol",
    "format_skip_reason",
    "format_diag_symbol",
    "pluralize",
    # JSON
    "to_json",
    "error_payload",
    "list_payload",
    "add_payload",
    "go_payload",
    "remove_payload",
    "merge_payload",
    "prune_dry_run_payload",
    "prune_execute_payload",
    "doctor_payload",
]
