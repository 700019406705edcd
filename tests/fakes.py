"""In-memory implementation of GitCommands for service-level tests."""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Set

from git_worktree_keeper.exceptions import ConflictError, GitOperationError
from git_worktree_keeper.services.git.interface import GitCommands


@dataclass
class FakeWorktree:
    path: Path
    branch: Optional[str]
    commit: str = "abc1234def5678"


class FakeGitCommands(GitCommands):
    """Repository state held in plain collections.

    The first worktree is the main worktree. Any method can be made to fail
    by putting an exception into ``failures`` under the method's name.
    Every call is recorded in ``calls`` as ``(method, args)``.
    """

    def __init__(self, root: Path, main_branch: Optional[str] = "main", remote_name: str = "origin"):
        self.root = Path(root)
        self.remote_name = remote_name
        self.worktrees: List[FakeWorktree] = [FakeWorktree(self.root, main_branch)]
        self.branches: Set[str] = {main_branch} if main_branch else set()
        self.remote_branches: Set[str] = set()
        self.remote_head: Optional[str] = None
        # branch -> method, "merged" (ancestor) or "rebase" (cherry)
        self.integrated: Dict[str, str] = {}
        self.upstreams: Dict[str, str] = {}
        self.merged_into_mainline: List[str] = []
        self.pushed: List[str] = []
        self.failures: Dict[str, Exception] = {}
        self.calls: List[tuple] = []

    def add_linked_worktree(self, branch: Optional[str], path: Optional[Path] = None) -> Path:
        if path is None:
            path = self.root / ".worktrees" / (branch or "detached").replace("/", "-")
        self.worktrees.append(FakeWorktree(Path(path), branch))
        if branch:
            self.branches.add(branch)
        return Path(path)

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, args))
        if name in self.failures:
            raise self.failures[name]

    def called(self, name: str) -> List[tuple]:
        return [args for method, args in self.calls if method == name]

    def show_toplevel(self, start: Path) -> Path:
        self._record("show_toplevel", start)
        return self.root

    def common_dir(self, start: Path) -> Path:
        self._record("common_dir", start)
        return self.root / ".git"

    def prune_worktrees(self, root: Path) -> None:
        self._record("prune_worktrees", root)

    def list_worktrees_raw(self, root: Path) -> str:
        self._record("list_worktrees_raw", root)
        blocks = []
        for wt in self.worktrees:
            lines = [f"worktree {wt.path}", f"HEAD {wt.commit}"]
            lines.append(f"branch refs/heads/{wt.branch}" if wt.branch else "detached")
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks) + "\n"

    def add_worktree(self, root: Path, path: Path, branch: str, base: Optional[str]) -> None:
        self._record("add_worktree", root, path, branch, base)
        if branch in self.branches:
            raise ConflictError(f"fatal: a branch named '{branch}' already exists")
        Path(path).mkdir(parents=True, exist_ok=True)
        self.add_linked_worktree(branch, path)

    def remove_worktree(self, root: Path, path: Path, force: bool) -> None:
        self._record("remove_worktree", root, path, force)
        self.worktrees = [wt for wt in self.worktrees if wt.path != Path(path)]

    def delete_branch(self, root: Path, branch: str, force: bool) -> None:
        self._record("delete_branch", root, branch, force)
        if not force and self.integrated.get(branch) != "merged":
            raise ConflictError(f"error: The branch '{branch}' is not fully merged.")
        self.branches.discard(branch)

    def branch_exists(self, root: Path, branch: str) -> bool:
        self._record("branch_exists", root, branch)
        return branch in self.branches

    def remote_branch_exists(self, root: Path, branch: str) -> bool:
        self._record("remote_branch_exists", root, branch)
        return branch in self.remote_branches

    def rev_exists(self, root: Path, rev: str) -> bool:
        self._record("rev_exists", root, rev)
        return rev in self.branches or rev == "HEAD"

    def set_upstream(self, root: Path, branch: str) -> None:
        self._record("set_upstream", root, branch)
        self.upstreams[branch] = f"{self.remote_name}/{branch}"

    def is_ancestor(self, root: Path, branch: str, mainline: str) -> bool:
        self._record("is_ancestor", root, branch, mainline)
        return self.integrated.get(branch) == "merged"

    def cherry(self, root: Path, mainline: str, branch: str) -> bool:
        self._record("cherry", root, mainline, branch)
        return self.integrated.get(branch) == "rebase"

    def default_remote_head(self, root: Path) -> str:
        self._record("default_remote_head", root)
        if self.remote_head is None:
            raise GitOperationError(
                f"fatal: ref refs/remotes/{self.remote_name}/HEAD is not a symbolic ref"
            )
        return self.remote_head

    def merge_no_ff(self, root: Path, branch: str) -> None:
        self._record("merge_no_ff", root, branch)
        self.merged_into_mainline.append(branch)
        self.integrated[branch] = "merged"

    def merge_abort(self, root: Path) -> None:
        self.calls.append(("merge_abort", (root,)))

    def push(self, root: Path, branch: str) -> None:
        self._record("push", root, branch)
        self.pushed.append(branch)
