"""
vcs-torture - A version control system torture test
"""

from .__version__ import __version__
from .core import Repo
from .services.worktree import Worktree
from .cli.main import main

__all__ = ["Repo", "Worktree", "main", "__version__"]
