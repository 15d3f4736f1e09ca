"""Subversion backend.

Subversion is client/server: the repository proper lives next to the
working copy in <dest>/<repo>-svnrepo and is reached through a file:// URL.
"""
import shutil
from pathlib import Path
from typing import Optional, Sequence

from vcs_torture.logging_config import get_logger
from vcs_torture.models.repo import CommandResult
from vcs_torture.services.vcs.base import VcsBackend

logger = get_logger(__name__)

SERVER_SUFFIX = "-svnrepo"


class SvnBackend(VcsBackend):
    name = "svn"
    executable = "svn"
    admin_executable = "svnadmin"
    metadata_dir = ".svn"
    version_args = ("--version", "--quiet")

    @property
    def server_path(self) -> Path:
        return self.dest / f"{self.repo_name}{SERVER_SUFFIX}"

    @property
    def server_url(self) -> Optional[str]:
        return self.server_path.resolve().as_uri()

    def initialize(self) -> float:
        elapsed = self.runner.run(
            self.admin_executable, ["create", self.server_path.name], str(self.dest)
        ).elapsed
        elapsed += self.runner.run(
            self.executable, ["checkout", self.server_url, self.repo_name], str(self.dest)
        ).elapsed
        return elapsed

    def add(self, paths: Sequence[str]) -> CommandResult:
        return self.run("add", "--parents", *paths)

    def commit(self, message: str) -> CommandResult:
        return self.run("commit", "-m", message)

    def remove_extras(self) -> bool:
        try:
            shutil.rmtree(self.server_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error(f"Couldn't remove {self.server_path}: {e}")
            return False
        return True
