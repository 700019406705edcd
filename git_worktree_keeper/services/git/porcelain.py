"""Parser for ``git worktree list --porcelain`` output.

Format (one block per worktree, blocks separated by a blank line)::

    worktree /path/to/worktree
    HEAD <commit sha>
    branch refs/heads/<name>      (or "detached")
    bare                          (bare repository only)

Each line is classified by its leading tag and fed to a small state
machine that collects one block at a time. The final block does not need a
trailing blank line.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from git_worktree_keeper.constants import LOCAL_BRANCH_PREFIX, SHORT_SHA_LENGTH
from git_worktree_keeper.models.worktree import WorktreeEntry


class LineKind(Enum):
    WORKTREE = "worktree"
    HEAD = "HEAD"
    BRANCH = "branch"
    BARE = "bare"
    DETACHED = "detached"
    BLANK = "blank"
    OTHER = "other"  # locked, prunable, ... (ignored)


_TAGGED = {
    "worktree": LineKind.WORKTREE,
    "HEAD": LineKind.HEAD,
    "branch": LineKind.BRANCH,
}
_FLAGS = {
    "bare": LineKind.BARE,
    "detached": LineKind.DETACHED,
}


def classify_line(line: str) -> Tuple[LineKind, str]:
    """Split a porcelain line into its kind and value."""
    line = line.rstrip("\r")
    if not line.strip():
        return LineKind.BLANK, ""

    tag, _, value = line.partition(" ")
    if value and tag in _TAGGED:
        return _TAGGED[tag], value
    if line.strip() in _FLAGS:
        return _FLAGS[line.strip()], ""
    return LineKind.OTHER, value


@dataclass
class RawWorktree:
    """One porcelain block before main-worktree assignment."""
    path: Path
    commit: str = ""
    branch: Optional[str] = None
    is_bare: bool = False


class PorcelainParser:
    """Line-fed state machine collecting porcelain blocks."""

    def __init__(self):
        self.blocks: List[RawWorktree] = []
        self._current: Optional[RawWorktree] = None

    def feed(self, line: str) -> None:
        kind, value = classify_line(line)

        if kind is LineKind.BLANK:
            self._close_block()
            return

        if kind is LineKind.WORKTREE:
            # A new path always starts a new block, separator or not
            self._close_block()
            self._current = RawWorktree(path=Path(value))
            return

        if self._current is None:
            # Attribute lines outside a block carry no path; nothing to attach them to
            return

        if kind is LineKind.HEAD:
            self._current.commit = value[:SHORT_SHA_LENGTH]
        elif kind is LineKind.BRANCH:
            if value.startswith(LOCAL_BRANCH_PREFIX):
                value = value[len(LOCAL_BRANCH_PREFIX):]
            self._current.branch = value
        elif kind is LineKind.DETACHED:
            self._current.branch = None
        elif kind is LineKind.BARE:
            self._current.is_bare = True

    def finish(self) -> List[RawWorktree]:
        self._close_block()
        return self.blocks

    def _close_block(self) -> None:
        if self._current is not None:
            self.blocks.append(self._current)
            self._current = None


def parse_worktree_porcelain(raw: str) -> List[WorktreeEntry]:
    """Parse porcelain output into worktree entries.

    Bare entries are dropped. The first surviving entry is the main worktree:
    git always lists it first, and comparing paths is unreliable when
    symlinks or canonicalization differ.
    """
    parser = PorcelainParser()
    for line in raw.splitlines():
        parser.feed(line)

    survivors = [block for block in parser.finish() if not block.is_bare]
    return [
        WorktreeEntry(
            path=block.path,
            branch=block.branch,
            commit=block.commit,
            is_main=index == 0,
        )
        for index, block in enumerate(survivors)
    ]
