"""Health diagnostics for the worktree convention directory"""
from typing import List

from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.worktree import DiagLevel, Diagnostic
from git_worktree_keeper.services.git.worktrees import WorktreeCatalog

logger = get_logger(__name__)


class DoctorService:
    """Detects orphaned worktree directories and detached worktrees."""

    def __init__(self, catalog: WorktreeCatalog):
        self.catalog = catalog

    def run(self) -> List[Diagnostic]:
        diagnostics = []

        wt_dir = self.catalog.worktrees_dir
        if not wt_dir.exists():
            return [
                Diagnostic(
                    DiagLevel.OK,
                    f"no {wt_dir.name} directory (no worktrees created yet)",
                )
            ]

        worktrees = self.catalog.list_worktrees()
        managed = {wt.path.resolve() for wt in worktrees}

        for child in sorted(wt_dir.iterdir()):
            if child.is_dir() and child.resolve() not in managed:
                logger.debug(f"Orphaned directory: {child}")
                diagnostics.append(
                    Diagnostic(DiagLevel.WARN, f"orphaned directory not tracked by git: {child}")
                )

        for wt in worktrees:
            if not wt.is_main and wt.branch is None:
                diagnostics.append(
                    Diagnostic(DiagLevel.WARN, f"worktree has no branch (detached HEAD): {wt.path}")
                )

        if not diagnostics:
            diagnostics.append(Diagnostic(DiagLevel.OK, "all worktrees healthy"))

        return diagnostics
