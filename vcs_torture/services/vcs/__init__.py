"""Version control system backends."""

from typing import Dict, Type

from vcs_torture.constants import SUPPORTED_VCS
from vcs_torture.exceptions import ConfigError
from vcs_torture.services.command_runner import CommandRunner

from .base import VcsBackend
from .git_backend import GitBackend
from .hg_backend import HgBackend
from .svn_backend import SvnBackend

BACKENDS: Dict[str, Type[VcsBackend]] = {
    "git": GitBackend,
    "hg": HgBackend,
    "svn": SvnBackend,
}


def get_backend(vcs: str, runner: CommandRunner, dest: str, repo_name: str) -> VcsBackend:
    """Create the backend for vcs, bound to dest/repo_name."""
    backend_class = BACKENDS.get(vcs)
    if backend_class is None:
        raise ConfigError(f"vcs must be one of {SUPPORTED_VCS}, got '{vcs}'")
    return backend_class(runner, dest, repo_name)


__all__ = [
    "BACKENDS",
    "VcsBackend",
    "GitBackend",
    "HgBackend",
    "SvnBackend",
    "get_backend",
]
