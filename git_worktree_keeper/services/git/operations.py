"""Git operations service"""

import os

import git
from pathlib import Path
from typing import List, MutableMapping, Optional

from git_worktree_keeper.constants import DEFAULT_REMOTE, GIT_ENV_OVERRIDES, LOCAL_BRANCH_PREFIX
from git_worktree_keeper.exceptions import NotARepositoryError, WorktreeKeeperError, classify_git_error
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.services.git.interface import GitCommands

logger = get_logger(__name__)


def scrub_git_environment(environ: MutableMapping[str, str]) -> List[str]:
    """Remove inherited GIT_* variables that would redirect git to another repository.

    Git hooks export GIT_DIR and friends; when git-worktree-keeper runs from a
    hook every git call would otherwise act on the hook's repository.

    Args:
        environ: Environment mapping to clean in place (usually os.environ)

    Returns:
        Names of the variables that were removed
    """
    removed = []
    for var in GIT_ENV_OVERRIDES:
        if var in environ:
            del environ[var]
            removed.append(var)
    if removed:
        logger.debug(f"Cleared inherited git environment: {', '.join(removed)}")
    return removed


def _clean_stream(text) -> str:
    """Strip GitPython's "stderr: '...'" decoration from captured output."""
    if not text:
        return ""
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    text = text.strip()
    for label in ("stderr:", "stdout:"):
        if text.startswith(label):
            text = text[len(label):].strip()
            if len(text) >= 2 and text[0] == text[-1] == "'":
                text = text[1:-1]
            break
    return text.strip()


def describe_command_error(e: git.exc.GitCommandError) -> str:
    """Build a readable message from a GitCommandError."""
    stderr = _clean_stream(getattr(e, "stderr", ""))
    stdout = _clean_stream(getattr(e, "stdout", ""))
    message = "\n".join(part for part in (stdout, stderr) if part)
    if message:
        return message

    command = e.command if hasattr(e, "command") else "git"
    if isinstance(command, (list, tuple)):
        command = " ".join(str(part) for part in command)
    status = e.status if hasattr(e, "status") else "unknown"
    return f"'{command}' failed with exit code {status}"


class GitOperations(GitCommands):
    """Runs git through GitPython.

    Every ``GitCommandError`` is converted exactly once, here, with
    ``classify_git_error``. Callers above this layer only ever see
    ``WorktreeKeeperError`` subclasses.
    """

    def __init__(self, remote_name: str = DEFAULT_REMOTE):
        """Initialize the service.

        Args:
            remote_name: Remote consulted for tracking branches, HEAD detection and push
        """
        self.remote_name = remote_name

    def _git(self, cwd: Path) -> git.Git:
        """Get a git command runner bound to ``cwd``.

        A fresh runner per call keeps no state between operations; repository
        state is always re-read from git. GitPython passes os.environ through to
        git and can only add variables, so inherited GIT_DIR and friends are
        cleared before every call.
        """
        scrub_git_environment(os.environ)
        return git.Git(str(cwd))

    def _run(self, cwd: Path, *args: str) -> str:
        """Run a git command and return its stdout, classifying failures."""
        logger.debug(f"git {' '.join(args)} (in {cwd})")
        try:
            return self._git(cwd).execute(["git", *args])
        except git.exc.GitCommandError as e:
            error_msg = describe_command_error(e)
            logger.debug(f"git {args[0]} failed (exit {e.status}): {error_msg}")
            raise classify_git_error(error_msg) from e

    def _succeeds(self, cwd: Path, *args: str) -> bool:
        """Run a git command whose answer is its exit status."""
        try:
            self._run(cwd, *args)
            return True
        except WorktreeKeeperError:
            return False

    def show_toplevel(self, start: Path) -> Path:
        if not Path(start).is_dir():
            raise NotARepositoryError(f"not a git repository: {start}")
        try:
            toplevel = self._run(start, "rev-parse", "--show-toplevel")
        except WorktreeKeeperError as e:
            raise NotARepositoryError(f"not a git repository: {start}") from e
        return Path(toplevel)

    def common_dir(self, start: Path) -> Path:
        common = Path(self._run(start, "rev-parse", "--git-common-dir"))
        # A relative answer is relative to the directory git ran in
        if not common.is_absolute():
            common = Path(start) / common
        return common.resolve()

    def prune_worktrees(self, root: Path) -> None:
        self._run(root, "worktree", "prune")

    def list_worktrees_raw(self, root: Path) -> str:
        return self._run(root, "worktree", "list", "--porcelain")

    def add_worktree(self, root: Path, path: Path, branch: str, base: Optional[str]) -> None:
        self._run(root, "worktree", "add", "-b", branch, str(path), base or "HEAD")
        logger.info(f"Created worktree for {branch} at {path}")

    def remove_worktree(self, root: Path, path: Path, force: bool) -> None:
        args = ["worktree", "remove"]
        if force:
            args.append("--force")
        args.append(str(path))
        self._run(root, *args)
        logger.info(f"Removed worktree at {path}")

    def delete_branch(self, root: Path, branch: str, force: bool) -> None:
        self._run(root, "branch", "-D" if force else "-d", branch)
        logger.info(f"Deleted branch {branch}")

    def branch_exists(self, root: Path, branch: str) -> bool:
        return self._succeeds(root, "rev-parse", "--verify", "--quiet", f"{LOCAL_BRANCH_PREFIX}{branch}")

    def remote_branch_exists(self, root: Path, branch: str) -> bool:
        return self._succeeds(
            root, "rev-parse", "--verify", "--quiet", f"refs/remotes/{self.remote_name}/{branch}"
        )

    def rev_exists(self, root: Path, rev: str) -> bool:
        return self._succeeds(root, "rev-parse", "--verify", "--quiet", f"{rev}^{{commit}}")

    def set_upstream(self, root: Path, branch: str) -> None:
        self._run(root, "branch", f"--set-upstream-to={self.remote_name}/{branch}", branch)

    def is_ancestor(self, root: Path, branch: str, mainline: str) -> bool:
        return self._succeeds(root, "merge-base", "--is-ancestor", branch, mainline)

    def cherry(self, root: Path, mainline: str, branch: str) -> bool:
        try:
            output = self._run(root, "cherry", mainline, branch)
        except WorktreeKeeperError as e:
            logger.debug(f"git cherry {mainline} {branch} failed: {e}")
            return False

        # "-" marks a commit whose patch already exists upstream, "+" one that does not
        lines = [line for line in output.splitlines() if line.strip()]
        return bool(lines) and all(line.startswith("-") for line in lines)

    def default_remote_head(self, root: Path) -> str:
        symref = self._run(root, "symbolic-ref", "--short", f"refs/remotes/{self.remote_name}/HEAD")
        prefix = f"{self.remote_name}/"
        return symref[len(prefix):] if symref.startswith(prefix) else symref

    def merge_no_ff(self, root: Path, branch: str) -> None:
        self._run(root, "merge", "--no-ff", "--no-edit", branch)
        logger.info(f"Merged {branch}")

    def merge_abort(self, root: Path) -> None:
        try:
            self._run(root, "merge", "--abort")
        except WorktreeKeeperError as e:
            logger.warning(f"Could not abort merge in {root}: {e}")

    def push(self, root: Path, branch: str) -> None:
        self._run(root, "push", self.remote_name, branch)
        logger.info(f"Pushed {branch} to {self.remote_name}")
