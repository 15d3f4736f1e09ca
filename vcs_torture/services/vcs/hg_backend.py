"""Mercurial backend"""
from typing import Sequence

from vcs_torture.constants import COMMIT_AUTHOR_NAME
from vcs_torture.models.repo import CommandResult
from vcs_torture.services.vcs.base import VcsBackend


class HgBackend(VcsBackend):
    name = "hg"
    executable = "hg"
    metadata_dir = ".hg"

    def initialize(self) -> float:
        return self.run("init").elapsed

    def add(self, paths: Sequence[str]) -> CommandResult:
        return self.run("add", *paths)

    def commit(self, message: str) -> CommandResult:
        return self.run("commit", "-m", message, "--user", COMMIT_AUTHOR_NAME)
