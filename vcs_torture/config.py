"""Configuration handling for vcs-torture"""

from dataclasses import dataclass, field
from typing import Optional

from vcs_torture.constants import MAX_COMMAND_LINE, MAX_DIRS_PER_DIR, SUPPORTED_VCS
from vcs_torture.exceptions import ConfigError


def _require_positive(name: str, value: int):
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")


@dataclass
class WorktreeOptions:
    """Shape of a generated worktree."""

    num_files: int = 1000
    files_per_dir: int = 48
    dirs_per_dir: int = 16
    file_size: int = 10000

    def __post_init__(self):
        _require_positive("num_files", self.num_files)
        _require_positive("files_per_dir", self.files_per_dir)
        _require_positive("dirs_per_dir", self.dirs_per_dir)
        if self.dirs_per_dir > MAX_DIRS_PER_DIR:
            raise ConfigError(
                f"dirs_per_dir can be at most {MAX_DIRS_PER_DIR}, got {self.dirs_per_dir}"
            )
        # Room for a CRLF line terminator
        if self.file_size < 2:
            raise ConfigError(f"file_size must be at least 2, got {self.file_size}")


@dataclass
class RepoOptions:
    """Shape of a commit run."""

    num_commits: int = 10
    adds_per_commit: int = 1
    files_per_add: int = 100

    def __post_init__(self):
        _require_positive("num_commits", self.num_commits)
        _require_positive("adds_per_commit", self.adds_per_commit)
        _require_positive("files_per_add", self.files_per_add)

    @property
    def files_per_commit(self) -> int:
        return self.adds_per_commit * self.files_per_add


# Field name -> command line flag, for error messages
_FLAGS = {
    "vcs": "--vcs",
    "dest": "--dest",
    "repo": "--repo",
}


@dataclass
class Config:
    """Configuration for one vcs-torture operation."""

    op: Optional[str] = None
    vcs: Optional[str] = None
    dest: Optional[str] = None
    repo: Optional[str] = None

    verbose: bool = False
    debug: bool = False

    max_command_line: int = MAX_COMMAND_LINE
    calibrate: bool = True  # Measure subprocess overhead before committing
    object_stats: bool = False  # Count git objects after each commit

    worktree: WorktreeOptions = field(default_factory=WorktreeOptions)
    repo_options: RepoOptions = field(default_factory=RepoOptions)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_vcs()
        self._validate_max_command_line()

    def _validate_vcs(self):
        """Validate vcs is one of the supported systems."""
        if self.vcs is not None and self.vcs not in SUPPORTED_VCS:
            raise ConfigError(f"vcs must be one of {SUPPORTED_VCS}, got '{self.vcs}'")

    def _validate_max_command_line(self):
        _require_positive("max_command_line", self.max_command_line)

    def require(self, *names: str):
        """Raise ConfigError for the first named field that is unset."""
        for name in names:
            if not getattr(self, name):
                flag = _FLAGS.get(name, name)
                raise ConfigError(f"Missing required option {flag}")

    def to_dict(self) -> dict:
        """Convert config to a flat dictionary."""
        return {
            "op": self.op,
            "vcs": self.vcs,
            "dest": self.dest,
            "repo": self.repo,
            "verbose": self.verbose,
            "debug": self.debug,
            "max_command_line": self.max_command_line,
            "calibrate": self.calibrate,
            "object_stats": self.object_stats,
            "num_files": self.worktree.num_files,
            "files_per_dir": self.worktree.files_per_dir,
            "dirs_per_dir": self.worktree.dirs_per_dir,
            "file_size": self.worktree.file_size,
            "num_commits": self.repo_options.num_commits,
            "adds_per_commit": self.repo_options.adds_per_commit,
            "files_per_add": self.repo_options.files_per_add,
        }

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from a flat dictionary, ignoring unknown keys."""
        worktree_fields = {"num_files", "files_per_dir", "dirs_per_dir", "file_size"}
        repo_fields = {"num_commits", "adds_per_commit", "files_per_add"}
        known_fields = {
            "op",
            "vcs",
            "dest",
            "repo",
            "verbose",
            "debug",
            "max_command_line",
            "calibrate",
            "object_stats",
        }

        worktree = WorktreeOptions(
            **{k: v for k, v in config_dict.items() if k in worktree_fields}
        )
        repo_options = RepoOptions(**{k: v for k, v in config_dict.items() if k in repo_fields})
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(worktree=worktree, repo_options=repo_options, **filtered)
