"""Shared constants for git-worktree-keeper."""

# Convention directory (under the repository root) holding managed worktrees
WORKTREES_DIR_NAME = ".worktrees"

DEFAULT_REMOTE = "origin"

# Local branch names tried, in order, when the remote HEAD is unknown
MAINLINE_CANDIDATES = ["main", "master"]

# Ref namespace stripped from `branch` lines of the porcelain listing
LOCAL_BRANCH_PREFIX = "refs/heads/"

# Length of the abbreviated commit id kept on worktree entries
SHORT_SHA_LENGTH = 7

# Environment variables that leak from parent git processes (e.g. hooks)
# and would redirect our git calls to the wrong repository.
GIT_ENV_OVERRIDES = (
    "GIT_DIR",
    "GIT_WORK_TREE",
    "GIT_INDEX_FILE",
    "GIT_OBJECT_DIRECTORY",
    "GIT_ALTERNATE_OBJECT_DIRECTORIES",
    "GIT_PREFIX",
)

# Reasons recorded on skipped prune entries
SKIP_NOT_INTEGRATED = "not_integrated"
SKIP_NO_BRANCH = "no_branch"
SKIP_REMOVAL_FAILED = "removal_failed"

SKIP_REASON_DISPLAY = {
    SKIP_NOT_INTEGRATED: "not integrated",
    SKIP_NO_BRANCH: "no branch",
    SKIP_REMOVAL_FAILED: "removal failed",
}


# Symbol constants
SYMBOL_OK = "✓"
SYMBOL_WARN = "⚠"
SYMBOL_ERROR = "✗"
SYMBOL_MAIN = "[main]"
DETACHED_LABEL = "(detached)"


# CLI colors (Rich color names)
CLI_COLORS = {
    "ok": "green",
    "warn": "yellow",
    "error": "red",
    "main": "cyan",
}
