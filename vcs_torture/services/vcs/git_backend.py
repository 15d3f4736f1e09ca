"""Git backend"""
from typing import Sequence, Tuple

import git

from vcs_torture.constants import COMMIT_AUTHOR_EMAIL, COMMIT_AUTHOR_NAME
from vcs_torture.logging_config import get_logger
from vcs_torture.models.repo import CommandResult, RepoInfo
from vcs_torture.services.vcs.base import VcsBackend

logger = get_logger(__name__)

COMMIT_ENV = {
    "GIT_AUTHOR_NAME": COMMIT_AUTHOR_NAME,
    "GIT_AUTHOR_EMAIL": COMMIT_AUTHOR_EMAIL,
    "GIT_COMMITTER_NAME": COMMIT_AUTHOR_NAME,
    "GIT_COMMITTER_EMAIL": COMMIT_AUTHOR_EMAIL,
}


class GitBackend(VcsBackend):
    name = "git"
    executable = "git"
    metadata_dir = ".git"

    def initialize(self) -> float:
        elapsed = self.run("init").elapsed
        # Automatic gc would land inside whatever command triggered it
        elapsed += self.run("config", "gc.auto", "0").elapsed
        elapsed += self.run("config", "gc.autodetach", "false").elapsed
        return elapsed

    def add(self, paths: Sequence[str]) -> CommandResult:
        return self.run("add", *paths)

    def commit(self, message: str) -> CommandResult:
        return self.run("commit", "-m", message, env=COMMIT_ENV)

    def _get_repo(self) -> git.Repo:
        return git.Repo(self.repo_path)

    def inspect(self) -> RepoInfo:
        repo = self._get_repo()
        try:
            # Unborn HEAD: nothing committed yet
            if not repo.head.is_valid():
                return RepoInfo()
            num_head_files = len(repo.git.ls_tree("-r", "HEAD").splitlines())
            num_commits = len(repo.git.log("--oneline").splitlines())
        finally:
            repo.close()
        logger.debug(f"{self.repo_path}: {num_head_files} files at HEAD, {num_commits} commits")
        return RepoInfo(num_head_files=num_head_files, num_commits=num_commits)

    def count_objects(self) -> Tuple[int, int]:
        repo = self._get_repo()
        try:
            output = repo.git.count_objects("-v")
        finally:
            repo.close()
        counts = {}
        for line in output.splitlines():
            key, _, value = line.partition(":")
            counts[key.strip()] = value.strip()
        return int(counts.get("count", 0)), int(counts.get("in-pack", 0))
