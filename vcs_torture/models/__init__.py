"""Data models for vcs-torture."""

from .progress import WorktreeProgress, CommitProgress
from .repo import RepoInfo, CommandResult

__all__ = ["WorktreeProgress", "CommitProgress", "RepoInfo", "CommandResult"]
