"""Repository creation and the add/commit driver"""

import os
import shutil
from pathlib import Path
from typing import Callable, List, Optional

from vcs_torture.config import RepoOptions, WorktreeOptions
from vcs_torture.constants import MAX_COMMAND_LINE
from vcs_torture.exceptions import UnsupportedOperationError
from vcs_torture.logging_config import get_logger
from vcs_torture.models.progress import CommitProgress
from vcs_torture.services.batcher import CommandBatcher
from vcs_torture.services.command_runner import CommandRunner
from vcs_torture.services.vcs import VcsBackend, get_backend
from vcs_torture.services.worktree import Worktree

logger = get_logger(__name__)

CommitCallback = Callable[[CommitProgress], bool]


class Repo:
    """A repository under test and the worktree that feeds it."""

    def __init__(
        self,
        dest: str,
        repo_name: str,
        vcs: str,
        options: Optional[RepoOptions] = None,
        runner: Optional[CommandRunner] = None,
        max_command_line: int = MAX_COMMAND_LINE,
        object_stats: bool = False,
    ):
        """Initialize Repo.

        Args:
            dest: Working area holding the repository
            repo_name: Repository directory name inside dest
            vcs: One of git, hg, svn
            options: Commit run shape; defaults to RepoOptions()
            runner: Command runner shared by all external commands
            max_command_line: Byte limit for the path list of one add command
            object_stats: If True, count git objects after every commit
        """
        self.dest = dest
        self.repo_name = repo_name
        self.vcs = vcs
        self.options = options or RepoOptions()
        self.runner = runner or CommandRunner()
        self.max_command_line = max_command_line
        self.object_stats = object_stats

        self.backend: VcsBackend = get_backend(vcs, self.runner, dest, repo_name)
        self.batcher = CommandBatcher(self.backend, max_command_line)
        self.worktree: Optional[Worktree] = None

        self.overhead = 0.0
        self.num_commits_done = 0
        self.num_head_files = 0
        self.num_index_files = 0
        self.loose_objects = 0
        self.pack_objects = 0
        self.add_time = 0.0
        self.commit_time = 0.0

    @property
    def repo_path(self) -> Path:
        return self.backend.repo_path

    @property
    def server_url(self) -> Optional[str]:
        return self.backend.server_url

    def add_worktree(self, options: Optional[WorktreeOptions] = None) -> Worktree:
        self.worktree = Worktree(self.dest, self.repo_name, options)
        return self.worktree

    def create(self) -> bool:
        """Make a new repo, or read information about an existing one.

        Returns:
            False if the directory couldn't be created or the existing
            repository can't be inspected
        """
        if self.backend.is_repository():
            return self._load_info()

        if self.repo_path.exists():
            # A worktree generated before the repository
            logger.info(f"Initializing {self.vcs} repository in existing {self.repo_path}")
        else:
            try:
                os.mkdir(self.repo_path)
            except OSError as e:
                logger.error(f"Couldn't create {self.repo_path}: {e}")
                return False

        elapsed = self.backend.initialize()
        logger.info(f"Created {self.vcs} repository {self.repo_path} in {elapsed:.4f}s")
        return True

    def _load_info(self) -> bool:
        try:
            info = self.backend.inspect()
        except UnsupportedOperationError as e:
            logger.error(str(e))
            return False
        self.num_head_files = info.num_head_files
        self.num_commits_done = info.num_commits
        self.num_index_files = info.num_head_files
        return True

    def calibrate_overhead(self, samples: int = 3) -> float:
        """Measure the cost of starting a trivial VCS command.

        The fastest of several runs is kept, and subtracted from every later
        measured command.
        """
        timings = [self.backend.version().elapsed for _ in range(samples)]
        self.overhead = min(timings)
        logger.info(f"Command overhead for {self.vcs}: {self.overhead:.4f}s")
        return self.overhead

    def _file_subset(self, pos: int, amount: int) -> List[str]:
        if self.worktree is None:
            return []
        return list(self.worktree.files[pos:pos + amount])

    def _refresh_object_counts(self, progress: CommitProgress):
        if not self.object_stats:
            return
        self.loose_objects, self.pack_objects = self.backend.count_objects()
        progress.loose_objects = self.loose_objects
        progress.pack_objects = self.pack_objects

    def commit(self, callback: Optional[CommitCallback] = None) -> bool:
        """Run num_commits add+commit cycles over the worktree's files.

        Each cycle adds adds_per_commit groups of files_per_add files, then
        commits. Files already at HEAD are skipped.

        Args:
            callback: Called after each add, after each commit, and once more
                with done=True. Returning True stops the run; a pending
                commit is not made.

        Returns:
            False if a callback asked to stop, True otherwise
        """
        progress = CommitProgress(num_index_files=self.num_index_files)
        files_per_commit = self.options.files_per_commit
        pos = self.num_head_files
        stopped = False

        for iteration in range(1, self.options.num_commits + 1):
            progress.commit = iteration

            added = 0
            while added < files_per_commit:
                amount = min(self.options.files_per_add, files_per_commit - added)
                add_list = self._file_subset(pos + added, amount)
                if not add_list:
                    break

                elapsed = self.batcher.add_files(add_list)
                self.add_time += max(0.0, elapsed - self.overhead * self.batcher.last_invocations)

                added += len(add_list)
                self.num_index_files += len(add_list)
                progress.num_index_files = self.num_index_files
                if callback is not None and callback(progress):
                    stopped = True
                    break

            pos += added
            if stopped:
                break

            if added == 0:
                logger.warning(f"Out of worktree files after {iteration - 1} commits")
                break

            ordinal = self.num_commits_done + 1
            result = self.backend.commit(f"commit {ordinal}")
            self.commit_time += max(0.0, result.elapsed - self.overhead)
            self.num_commits_done = ordinal
            self._refresh_object_counts(progress)

            if callback is not None and callback(progress):
                stopped = True
                break

        progress.done = True
        if callback is not None and callback(progress):
            stopped = True
        return not stopped


def delete_repo(dest: str, repo_name: str, vcs: str) -> bool:
    """Remove a repository and anything else that belongs to it.

    Returns:
        False if something couldn't be removed
    """
    backend = get_backend(vcs, CommandRunner(), dest, repo_name)
    try:
        shutil.rmtree(backend.repo_path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.error(f"Couldn't remove {backend.repo_path}: {e}")
        return False
    return backend.remove_extras()
