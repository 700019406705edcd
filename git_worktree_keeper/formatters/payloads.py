"""JSON envelopes for machine-readable output.

Every envelope carries ``ok``. Path values are plain strings.
"""

import json
from typing import Any, Dict, List

from git_worktree_keeper.models.worktree import (
    AddResult,
    DiagLevel,
    Diagnostic,
    GoResult,
    MergeResult,
    PruneDryRun,
    PruneExecuteResult,
    RemoveResult,
    WorktreeEntry,
)


def to_json(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, indent=2)


def error_payload(message: str, kind: str) -> Dict[str, Any]:
    return {"ok": False, "error": kind, "message": message}


def list_payload(worktrees: List[WorktreeEntry]) -> Dict[str, Any]:
    return {
        "ok": True,
        "worktrees": [
            {
                "path": str(wt.path),
                "branch": wt.branch,
                "commit": wt.commit,
                "is_main": wt.is_main,
            }
            for wt in worktrees
        ],
    }


def add_payload(result: AddResult) -> Dict[str, Any]:
    return {
        "ok": True,
        "message": f"created worktree for branch '{result.branch}'",
        "repo_root": str(result.repo_root),
        "worktree_path": str(result.worktree_path),
        "cd_path": str(result.worktree_path),
        "branch": result.branch.name,
        "tracking": result.tracking,
    }


def go_payload(result: GoResult) -> Dict[str, Any]:
    return {
        "ok": True,
        "message": f"resolved worktree for branch '{result.branch}'",
        "repo_root": str(result.repo_root),
        "worktree_path": str(result.worktree_path),
        "cd_path": str(result.worktree_path),
        "branch": result.branch.name,
    }


def remove_payload(result: RemoveResult) -> Dict[str, Any]:
    payload = {
        "ok": True,
        "message": f"removed worktree for branch '{result.branch}'",
        "repo_root": str(result.repo_root),
        "removed_path": str(result.removed_path),
        "branch": result.branch.name,
    }
    if result.warning:
        payload["warning"] = result.warning
    return payload


def merge_payload(result: MergeResult) -> Dict[str, Any]:
    return {
        "ok": True,
        "message": f"merged '{result.branch}' into {result.mainline}",
        "repo_root": str(result.repo_root),
        "branch": result.branch.name,
        "mainline": result.mainline,
        "cleaned_up": result.cleaned_up,
        "removed_path": str(result.removed_path) if result.removed_path else None,
        "pushed": result.pushed,
        "warnings": list(result.warnings),
    }


def prune_dry_run_payload(result: PruneDryRun) -> Dict[str, Any]:
    return {
        "ok": True,
        "mainline": result.mainline,
        "worktrees": [
            {
                "branch": entry.branch,
                "status": entry.status.state.value,
                "method": entry.status.method.value if entry.status.method else None,
                "path": str(entry.path),
            }
            for entry in result.entries
        ],
        "prunable": result.prunable,
    }


def prune_execute_payload(result: PruneExecuteResult) -> Dict[str, Any]:
    return {
        "ok": True,
        "mainline": result.mainline,
        "pruned": [{"branch": e.branch, "path": str(e.path)} for e in result.pruned],
        "skipped": [
            {"branch": e.branch, "reason": e.reason, "path": str(e.path)} for e in result.skipped
        ],
        "warnings": list(result.warnings),
    }


def doctor_payload(diagnostics: List[Diagnostic]) -> Dict[str, Any]:
    return {
        "ok": not any(d.level is DiagLevel.ERROR for d in diagnostics),
        "diagnostics": [{"level": d.level.value, "message": d.message} for d in diagnostics],
    }
