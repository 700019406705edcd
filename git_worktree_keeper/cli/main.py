"""Command-line interface for git-worktree-keeper"""

import os
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.prompt import Prompt

from git_worktree_keeper.config import Config
from git_worktree_keeper.core import WorktreeKeeper
from git_worktree_keeper.exceptions import UsageError, WorktreeKeeperError
from git_worktree_keeper.formatters import (
    add_payload,
    doctor_payload,
    error_payload,
    go_payload,
    list_payload,
    merge_payload,
    prune_dry_run_payload,
    prune_execute_payload,
    remove_payload,
    to_json,
)
from git_worktree_keeper.logging_config import get_logger, setup_logging
from git_worktree_keeper.models.branch import BranchName
from git_worktree_keeper.services.display_service import DisplayService
from git_worktree_keeper.services.git import scrub_git_environment
from .args import parse_args

logger = get_logger(__name__)


def _print_lines(*values) -> None:
    for value in values:
        print(value)


def _pick_go_branch(keeper: WorktreeKeeper, err_console: Console) -> BranchName:
    """Choose a branch for `go` when none was given.

    A single candidate is selected automatically; several candidates are
    offered in a prompt, but only when stdin is interactive.
    """
    candidates = [wt.branch for wt in keeper.list_worktrees() if not wt.is_main and wt.branch]
    if not candidates:
        raise UsageError("no worktrees to go to; create one with 'wt add <branch>'")
    if len(candidates) == 1:
        logger.debug(f"Auto-selected only worktree branch: {candidates[0]}")
        return BranchName(candidates[0])
    if not sys.stdin.isatty():
        raise UsageError(f"no branch specified; choose one of: {', '.join(candidates)}")

    for index, name in enumerate(candidates, start=1):
        err_console.print(f"  {index}. {name}", markup=False)
    choice = Prompt.ask(
        "Select worktree",
        choices=[str(i) for i in range(1, len(candidates) + 1)],
        console=err_console,
    )
    return BranchName(candidates[int(choice) - 1])


def run_command(args, keeper: WorktreeKeeper, display: DisplayService) -> int:
    """Execute a parsed command against a keeper and render the result."""
    cwd = Path.cwd()
    command = args.command

    if command == "list":
        worktrees = keeper.list_worktrees()
        if args.json:
            print(to_json(list_payload(worktrees)))
        else:
            display.display_worktree_table(worktrees)

    elif command == "add":
        result = keeper.add(args.branch, base=args.base)
        if args.print_cd_path:
            _print_lines(result.worktree_path)
        elif args.json:
            print(to_json(add_payload(result)))
        else:
            display.display_add(result)

    elif command == "go":
        branch = args.branch or _pick_go_branch(keeper, display.err_console)
        result = keeper.go(branch)
        if args.print_cd_path:
            _print_lines(result.worktree_path)
        elif args.json:
            print(to_json(go_payload(result)))
        else:
            display.display_go(result)

    elif command == "remove":
        result = keeper.remove(args.branch, force=args.force, cwd=cwd)
        if args.print_paths:
            _print_lines(result.repo_root, result.removed_path)
            if result.warning:
                display.warning(result.warning)
        elif args.json:
            print(to_json(remove_payload(result)))
        else:
            display.display_remove(result)

    elif command == "merge":
        result = keeper.merge(args.branch, push=args.push, no_cleanup=args.no_cleanup, cwd=cwd)
        if args.print_paths:
            _print_lines(result.repo_root, result.removed_path or "")
            for warning in result.warnings:
                display.warning(warning)
        elif args.json:
            print(to_json(merge_payload(result)))
        else:
            display.display_merge(result)

    elif command == "prune":
        if args.execute:
            result = keeper.prune_execute(args.mainline, force=args.force)
            if args.json:
                print(to_json(prune_execute_payload(result)))
            else:
                display.display_prune_execute(result)
        else:
            result = keeper.prune_dry_run(args.mainline)
            if args.json:
                print(to_json(prune_dry_run_payload(result)))
            else:
                display.display_prune_dry_run(result)

    elif command == "doctor":
        diagnostics = keeper.doctor()
        if args.json:
            print(to_json(doctor_payload(diagnostics)))
        else:
            display.display_diagnostics(diagnostics)

    else:
        raise UsageError(f"unknown command: {command}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    display = DisplayService()

    try:
        # Hooks export GIT_DIR and friends; they must not leak into our git calls
        removed = scrub_git_environment(os.environ)

        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)
        if removed:
            logger.debug(f"Ignoring inherited git environment: {', '.join(removed)}")

        try:
            config = Config.from_env(os.environ, verbose=parsed_args.verbose, debug=parsed_args.debug)
        except ValueError as e:
            raise UsageError(f"invalid configuration: {e}") from e
        if parsed_args.debug:
            for key, value in config.to_dict().items():
                logger.debug(f"Config {key}: {value}")

        keeper = WorktreeKeeper(parsed_args.repo or os.getcwd(), config)
        return run_command(parsed_args, keeper, display)

    except WorktreeKeeperError as e:
        logger.debug(f"{e.kind.name} error: {e.message}")
        if parsed_args.json:
            print(to_json(error_payload(e.message, e.kind.name.lower())))
        else:
            display.error(e.message)
        return e.exit_code
    except KeyboardInterrupt:
        display.err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
