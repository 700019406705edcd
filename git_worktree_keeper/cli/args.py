"""Command-line argument parsing for git-worktree-keeper."""

import argparse
from typing import List, Optional

from git_worktree_keeper.__version__ import __version__


def _add_common_arguments(parser: argparse.ArgumentParser, suppress: bool = False) -> None:
    # Subcommand copies must not reset flags given before the subcommand
    kwargs = {"default": argparse.SUPPRESS} if suppress else {}
    parser.add_argument(
        "--repo", metavar="PATH", help="Repository path (default: current directory)", **kwargs
    )
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON", **kwargs)
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show verbose output", **kwargs
    )
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting", **kwargs
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with one subparser per command."""
    common = argparse.ArgumentParser(add_help=False)
    _add_common_arguments(common, suppress=True)

    parser = argparse.ArgumentParser(
        prog="wt",
        description="Manage git worktrees under a .worktrees/ directory",
    )
    _add_common_arguments(parser)
    parser.add_argument("--version", action="version", version=f"git-worktree-keeper {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    subparsers.add_parser("list", parents=[common], help="List all worktrees")

    add = subparsers.add_parser("add", parents=[common], help="Create a worktree for a new branch")
    add.add_argument("branch", help="Branch to create")
    add.add_argument("--base", metavar="REV", help="Start the branch from REV (default: HEAD)")
    add.add_argument(
        "--print-cd-path", action="store_true", help="Print only the worktree path (for shell cd)"
    )

    go = subparsers.add_parser("go", parents=[common], help="Locate the worktree for a branch")
    go.add_argument("branch", nargs="?", help="Branch to go to (prompts when omitted)")
    go.add_argument(
        "--print-cd-path", action="store_true", help="Print only the worktree path (for shell cd)"
    )

    remove = subparsers.add_parser("remove", parents=[common], help="Remove a worktree and its branch")
    remove.add_argument("branch", nargs="?", help="Branch to remove (default: current worktree)")
    remove.add_argument(
        "--force", action="store_true", help="Remove even with uncommitted changes or unmerged commits"
    )
    remove.add_argument(
        "--print-paths", action="store_true", help="Print repo root and removed path, one per line"
    )

    merge = subparsers.add_parser("merge", parents=[common], help="Merge a worktree branch into mainline")
    merge.add_argument("branch", nargs="?", help="Branch to merge (default: current worktree)")
    merge.add_argument("--push", action="store_true", help="Push mainline after merging")
    merge.add_argument(
        "--no-cleanup", action="store_true", help="Keep the worktree and branch after merging"
    )
    merge.add_argument(
        "--print-paths", action="store_true", help="Print repo root and removed path, one per line"
    )

    prune = subparsers.add_parser("prune", parents=[common], help="Remove integrated worktrees")
    prune.add_argument(
        "--execute", action="store_true", help="Actually remove (default: preview only)"
    )
    prune.add_argument("--force", action="store_true", help="Force worktree removal")
    prune.add_argument("--mainline", metavar="BRANCH", help="Mainline branch (default: auto-detect)")

    subparsers.add_parser("doctor", parents=[common], help="Check worktree health")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
