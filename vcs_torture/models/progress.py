"""Progress callback payloads"""
from dataclasses import dataclass


@dataclass
class WorktreeProgress:
    """State passed to the worktree generation callback."""
    done: bool = False
    position: int = 0
    num_files: int = 0
    path: str = ""


@dataclass
class CommitProgress:
    """State passed to the commit callback."""
    done: bool = False
    commit: int = 0
    num_index_files: int = 0
    loose_objects: int = 0  # git only
    pack_objects: int = 0  # git only
