"""Core functionality for vcs-torture"""

from .repo import Repo, delete_repo

__all__ = ["Repo", "delete_repo"]
