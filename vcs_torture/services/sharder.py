"""Directory placement for generated files."""

from typing import List

from vcs_torture.constants import MAX_DIRS_PER_DIR


class DirectorySharder:
    """Places files in a tree that grows deeper as the file count grows.

    A mixed-radix counter decides where the next file goes. Digit 0 counts
    files within a directory (radix files_per_dir); every other digit counts
    sibling directories (radix dirs_per_dir). A carry out of the top digit
    adds a level. No directory ever holds more than files_per_dir files or
    dirs_per_dir subdirectories, which keeps directory scans cheap at large
    file counts.

    Typical values are 48 files and 16 directories per directory.
    """

    def __init__(self, files_per_dir: int, dirs_per_dir: int):
        if files_per_dir <= 0 or dirs_per_dir <= 0:
            raise ValueError("files_per_dir and dirs_per_dir must be positive")
        if dirs_per_dir > MAX_DIRS_PER_DIR:
            raise ValueError(f"dirs_per_dir can be at most {MAX_DIRS_PER_DIR}")
        self.files_per_dir = files_per_dir
        self.dirs_per_dir = dirs_per_dir
        self.digits: List[int] = [0]

    @property
    def depth(self) -> int:
        return len(self.digits) - 1

    def current_path(self) -> str:
        """Path for the current position; the empty string is the root."""
        return "/".join(chr(ord("a") + digit) for digit in reversed(self.digits[1:]))

    def advance(self):
        """Increment the counter, carrying into (and adding) higher digits."""
        radix = self.files_per_dir
        for i in range(len(self.digits)):
            self.digits[i] += 1
            if self.digits[i] < radix:
                return
            self.digits[i] = 0
            radix = self.dirs_per_dir
        self.digits.append(0)

    def next_path(self) -> str:
        """Return the current path, then move to the next slot."""
        path = self.current_path()
        self.advance()
        return path

    def reset(self):
        self.digits = [0]
