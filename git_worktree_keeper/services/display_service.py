"""Human-readable rendering of worktree operation results"""
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from git_worktree_keeper.constants import CLI_COLORS, SYMBOL_MAIN, SYMBOL_WARN
from git_worktree_keeper.formatters import (
    format_branch_label,
    format_diag_symbol,
    format_integration_status,
    format_integration_symbol,
    format_skip_reason,
    pluralize,
)
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.worktree import (
    AddResult,
    DiagLevel,
    Diagnostic,
    GoResult,
    IntegrationState,
    MergeResult,
    PruneDryRun,
    PruneExecuteResult,
    RemoveResult,
    WorktreeEntry,
)

logger = get_logger(__name__)

_STATE_STYLES = {
    IntegrationState.INTEGRATED: CLI_COLORS["ok"],
    IntegrationState.NOT_INTEGRATED: CLI_COLORS["error"],
    IntegrationState.NO_BRANCH: CLI_COLORS["warn"],
}

_DIAG_STYLES = {
    DiagLevel.OK: CLI_COLORS["ok"],
    DiagLevel.WARN: CLI_COLORS["warn"],
    DiagLevel.ERROR: CLI_COLORS["error"],
}


class DisplayService:
    """Prints operation results to a rich console.

    Warnings and errors go to a separate stderr console so stdout stays
    clean for shell integration.
    """

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def warning(self, message: str) -> None:
        self.err_console.print(f"[{CLI_COLORS['warn']}]warning:[/] {escape(message)}", soft_wrap=True)

    def error(self, message: str) -> None:
        self.err_console.print(f"[{CLI_COLORS['error']}]error:[/] {escape(message)}", soft_wrap=True)

    def _plain(self, text: str, style: Optional[str] = None) -> None:
        # Paths and branch names may contain brackets; never treat them as markup
        self.console.print(text, style=style, markup=False, soft_wrap=True)

    def display_worktree_table(self, worktrees: List[WorktreeEntry]) -> None:
        """Display all worktrees, main first."""
        table = Table()
        table.add_column("Branch")
        table.add_column("Commit")
        table.add_column("Path")

        for wt in worktrees:
            label = format_branch_label(wt.branch)
            if wt.is_main:
                label = f"{label} {SYMBOL_MAIN}"
            style = CLI_COLORS["main"] if wt.is_main else (CLI_COLORS["warn"] if wt.is_detached else None)
            table.add_row(Text(label), wt.commit, Text(str(wt.path)), style=style)

        self.console.print(table)

    def display_add(self, result: AddResult) -> None:
        self._plain(f"Created worktree for branch '{result.branch}' at {result.worktree_path}")
        if result.tracking:
            self._plain(f"Tracking remote branch for '{result.branch}'", style="dim")

    def display_go(self, result: GoResult) -> None:
        self._plain(f"Worktree for branch '{result.branch}' is at {result.worktree_path}")

    def display_remove(self, result: RemoveResult) -> None:
        if result.warning:
            self._plain(f"Removed worktree for '{result.branch}' ({result.removed_path})")
            self.warning(result.warning)
        else:
            self._plain(f"Removed worktree and branch '{result.branch}' ({result.removed_path})")

    def display_merge(self, result: MergeResult) -> None:
        self._plain(f"Merged '{result.branch}' into {result.mainline}", style=CLI_COLORS["ok"])
        if result.cleaned_up and result.removed_path is not None:
            self._plain(f"Removed worktree and branch '{result.branch}' ({result.removed_path})")
        if result.pushed:
            self._plain(f"Pushed {result.mainline}")
        for warning in result.warnings:
            self.warning(warning)

    def display_prune_dry_run(self, result: PruneDryRun) -> None:
        self._plain(f"Mainline: {result.mainline}", style="bold")
        if not result.entries:
            self._plain("No worktrees to check")
            return

        for entry in result.entries:
            symbol = format_integration_symbol(entry.status)
            label = format_branch_label(entry.branch)
            self._plain(
                f"  {symbol} {label} {format_integration_status(entry.status)}",
                style=_STATE_STYLES[entry.status.state],
            )

        if result.prunable:
            self._plain(
                f"{pluralize(result.prunable, 'worktree')} can be pruned; "
                "run with --execute to remove"
            )
        else:
            self._plain("Nothing to prune")

    def display_prune_execute(self, result: PruneExecuteResult) -> None:
        self._plain(f"Mainline: {result.mainline}", style="bold")
        for entry in result.pruned:
            self._plain(f"  Removed {entry.branch}", style=CLI_COLORS["ok"])
        for entry in result.skipped:
            label = format_branch_label(entry.branch)
            self._plain(f"  Skipped {label} ({format_skip_reason(entry.reason)})", style="dim")
        for warning in result.warnings:
            self.warning(warning)
        logger.debug(f"Pruned {len(result.pruned)}, skipped {len(result.skipped)}")

    def display_diagnostics(self, diagnostics: List[Diagnostic]) -> None:
        for diag in diagnostics:
            self._plain(
                f"{format_diag_symbol(diag.level)} {diag.message}",
                style=_DIAG_STYLES[diag.level],
            )
        warnings = sum(1 for d in diagnostics if d.level is not DiagLevel.OK)
        if warnings:
            self._plain(f"{SYMBOL_WARN} {pluralize(warnings, 'issue')} found", style=CLI_COLORS["warn"])
