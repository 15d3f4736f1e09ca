"""Repository and command result models."""

from dataclasses import dataclass


@dataclass
class RepoInfo:
    """Information read from an existing repository."""

    num_head_files: int = 0
    num_commits: int = 0


@dataclass
class CommandResult:
    """Outcome of one external command."""

    elapsed: float  # seconds, monotonic clock
    stdout: str = ""
    stderr: str = ""
