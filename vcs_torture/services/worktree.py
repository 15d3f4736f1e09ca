"""Worktree generation service for vcs-torture."""

import os
from pathlib import Path
from typing import Callable, List, Optional, Set

from vcs_torture.config import WorktreeOptions
from vcs_torture.constants import LINE_TERMINATOR
from vcs_torture.exceptions import WorktreeError
from vcs_torture.logging_config import get_logger
from vcs_torture.models.progress import WorktreeProgress
from vcs_torture.services.generators import ContentGenerator, NameGenerator
from vcs_torture.services.sharder import DirectorySharder

logger = get_logger(__name__)

WorktreeCallback = Callable[[WorktreeProgress], bool]


class Worktree:
    """Manages the files that can be added to a repository.

    Every file gets a consistent but unique pathname, so generating the same
    worktree twice produces the same tree, and a second run only writes the
    files that are missing.
    """

    def __init__(
        self,
        dest: str,
        repo_name: str,
        options: Optional[WorktreeOptions] = None,
        newline: bytes = LINE_TERMINATOR,
    ):
        """Initialize the worktree.

        Args:
            dest: Working area that holds the worktree
            repo_name: Name of the worktree directory inside dest
            options: Worktree shape; defaults to WorktreeOptions()
            newline: Line terminator for file content
        """
        self.root = Path(dest) / repo_name
        self.options = options or WorktreeOptions()
        self.newline = newline

        self.names = NameGenerator()
        self.contents = ContentGenerator(self.options.file_size, newline)
        self.sharder = DirectorySharder(self.options.files_per_dir, self.options.dirs_per_dir)

        self.files: List[str] = []
        self.dirs: Set[str] = set()
        self.files_written = 0

    def _reset(self):
        self.names.reset()
        self.contents.reset()
        self.sharder.reset()
        self.files = []
        self.dirs = set()
        self.files_written = 0

    def _make_dir(self, dirpath: str):
        if dirpath in self.dirs:
            return
        self.dirs.add(dirpath)
        target = self.root / dirpath if dirpath else self.root
        try:
            os.makedirs(target, exist_ok=True)
        except OSError as e:
            raise WorktreeError(str(target), str(e)) from e

    def _write_file(self, relpath: str):
        fpath = self.root / relpath
        if fpath.exists():
            self.contents.skip()
            return
        content = self.contents.next_content()
        try:
            fpath.write_bytes(content)
        except OSError as e:
            raise WorktreeError(str(fpath), str(e)) from e
        self.files_written += 1

    def generate(self, callback: Optional[WorktreeCallback] = None) -> bool:
        """Create the worktree files.

        Args:
            callback: Called after every file and once more with done=True.
                Returning True stops generation.

        Returns:
            False if a callback asked to stop, True otherwise
        """
        self._reset()
        progress = WorktreeProgress(num_files=self.options.num_files)
        stopped = False

        logger.debug(
            f"Generating {self.options.num_files} files of {self.options.file_size} bytes in {self.root}"
        )

        for position in range(self.options.num_files):
            fname = self.names.next_unique_name()
            dirpath = self.sharder.next_path()
            self._make_dir(dirpath)

            relpath = f"{dirpath}/{fname}" if dirpath else fname
            self.files.append(relpath)
            self._write_file(relpath)

            progress.position = position + 1
            progress.path = relpath
            if callback is not None and callback(progress):
                logger.info(f"Worktree generation stopped after {len(self.files)} files")
                stopped = True
                break

        progress.done = True
        progress.position = len(self.files)
        if callback is not None and callback(progress):
            stopped = True

        logger.debug(
            f"Worktree has {len(self.files)} files in {len(self.dirs)} directories "
            f"({self.files_written} written)"
        )
        return not stopped
