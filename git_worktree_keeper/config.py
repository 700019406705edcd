"""Configuration handling for git-worktree-keeper"""

from dataclasses import dataclass, field
from typing import List, Mapping

from git_worktree_keeper.constants import DEFAULT_REMOTE, MAINLINE_CANDIDATES, WORKTREES_DIR_NAME

# Environment variables understood by Config.from_env
ENV_WORKTREES_DIR = "WT_WORKTREES_DIR"
ENV_REMOTE = "WT_REMOTE"


@dataclass
class Config:
    """Configuration for git-worktree-keeper with validation."""

    # Layout
    worktrees_dir_name: str = WORKTREES_DIR_NAME

    # Remote / mainline detection
    remote_name: str = DEFAULT_REMOTE
    mainline_candidates: List[str] = field(default_factory=lambda: list(MAINLINE_CANDIDATES))

    # Execution modes
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_worktrees_dir_name()
        self._validate_remote_name()
        self._validate_mainline_candidates()

    def _validate_worktrees_dir_name(self):
        """Validate worktrees_dir_name is a single path component."""
        name = (self.worktrees_dir_name or "").strip()
        if not name:
            raise ValueError("worktrees_dir_name cannot be empty")
        if "/" in name or "\\" in name or name in (".", ".."):
            raise ValueError(
                f"worktrees_dir_name must be a single directory name, got '{self.worktrees_dir_name}'"
            )
        self.worktrees_dir_name = name

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def _validate_mainline_candidates(self):
        """Validate mainline_candidates list."""
        if not isinstance(self.mainline_candidates, list):
            raise ValueError("mainline_candidates must be a list")
        if not self.mainline_candidates:
            raise ValueError("mainline_candidates cannot be empty")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "worktrees_dir_name": self.worktrees_dir_name,
            "remote_name": self.remote_name,
            "mainline_candidates": self.mainline_candidates,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "worktrees_dir_name",
            "remote_name",
            "mainline_candidates",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

    @classmethod
    def from_env(cls, environ: Mapping[str, str], **overrides) -> "Config":
        """Create Config from an environment snapshot plus explicit overrides.

        Args:
            environ: Environment mapping (usually a copy of os.environ)
            **overrides: Values that take precedence over the environment

        Returns:
            Validated Config
        """
        values = {}
        if environ.get(ENV_WORKTREES_DIR):
            values["worktrees_dir_name"] = environ[ENV_WORKTREES_DIR]
        if environ.get(ENV_REMOTE):
            values["remote_name"] = environ[ENV_REMOTE]
        values.update(overrides)
        return cls.from_dict(values)
