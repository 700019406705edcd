"""Branch name model and the directory-name codec"""
from dataclasses import dataclass

from git_worktree_keeper.exceptions import UsageError

FNV64_OFFSET_BASIS = 0xCBF29CE484222325
FNV64_PRIME = 0x100000001B3
_MASK64 = 0xFFFFFFFFFFFFFFFF

# Slug used when a branch name has no alphanumeric characters at all
EMPTY_SLUG = "branch"


def slugify(name: str) -> str:
    """Lower-case ASCII alphanumerics, every other run collapsed to one hyphen.

    Leading and trailing hyphens are trimmed, so the result may be empty.
    """
    parts = []
    prev_hyphen = True  # suppress leading hyphen
    for ch in name:
        if ch.isascii() and ch.isalnum():
            parts.append(ch.lower())
            prev_hyphen = False
        elif not prev_hyphen:
            parts.append("-")
            prev_hyphen = True

    return "".join(parts).rstrip("-")


def hash8(name: str) -> str:
    """8 lowercase hex digits: low 32 bits of 64-bit FNV-1a over the UTF-8 bytes."""
    h = FNV64_OFFSET_BASIS
    for byte in name.encode("utf-8"):
        h ^= byte
        h = (h * FNV64_PRIME) & _MASK64
    return f"{h & 0xFFFFFFFF:08x}"


def to_directory_name(name: str) -> str:
    """Collision-safe directory name for a branch: ``<slug>--<hash8>``.

    The hash is computed over the original name, so ``feature/a-b`` and
    ``feature-a/b`` share a slug but never a directory.
    """
    slug = slugify(name) or EMPTY_SLUG
    return f"{slug}--{hash8(name)}"


@dataclass(frozen=True)
class BranchName:
    """A validated local branch name."""
    name: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise UsageError("branch name cannot be empty")

    def to_dir_name(self) -> str:
        return to_directory_name(self.name)

    def __str__(self) -> str:
        return self.name
