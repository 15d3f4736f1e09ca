"""Common interface for the version control systems we drive."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

from vcs_torture.exceptions import UnsupportedOperationError
from vcs_torture.models.repo import CommandResult, RepoInfo
from vcs_torture.services.command_runner import CommandRunner


class VcsBackend(ABC):
    """One version control system, bound to one repository."""

    name: str = ""
    executable: str = ""
    metadata_dir: str = ""
    version_args: Tuple[str, ...] = ("--version",)

    def __init__(self, runner: CommandRunner, dest: str, repo_name: str):
        self.runner = runner
        self.dest = Path(dest)
        self.repo_name = repo_name
        self.repo_path = self.dest / repo_name

    def run(self, *args: str, env: Optional[Dict[str, str]] = None) -> CommandResult:
        """Run the VCS executable inside the repository."""
        return self.runner.run(self.executable, args, str(self.repo_path), env=env)

    def is_repository(self) -> bool:
        return (self.repo_path / self.metadata_dir).is_dir()

    @property
    def server_url(self) -> Optional[str]:
        return None

    @abstractmethod
    def initialize(self) -> float:
        """Create an empty repository in repo_path; returns elapsed seconds."""

    @abstractmethod
    def add(self, paths: Sequence[str]) -> CommandResult:
        """Add paths (relative to the repository) in one command."""

    @abstractmethod
    def commit(self, message: str) -> CommandResult:
        """Commit everything that was added."""

    def inspect(self) -> RepoInfo:
        """Read head file and commit counts from an existing repository."""
        raise UnsupportedOperationError(self.name, "inspect")

    def count_objects(self) -> Tuple[int, int]:
        """Return (loose, packed) object counts, if the system has them."""
        return 0, 0

    def version(self) -> CommandResult:
        """Run a trivial command; used to measure invocation overhead."""
        return self.runner.run(self.executable, self.version_args, str(self.dest))

    def remove_extras(self) -> bool:
        """Delete anything besides repo_path that belongs to this repository."""
        return True
