"""Splitting path lists to fit on a command line."""

from typing import TYPE_CHECKING, Iterator, List, Sequence

from vcs_torture.exceptions import CommandLineTooLongError
from vcs_torture.logging_config import get_logger

if TYPE_CHECKING:
    from vcs_torture.services.vcs.base import VcsBackend

logger = get_logger(__name__)


def split_batches(paths: Sequence[str], max_length: int, separator: str = " ") -> Iterator[List[str]]:
    """Yield consecutive runs of paths that each fit in max_length.

    Each path costs len(separator) + len(path) bytes. Runs are as long as
    possible, so the fewest commands are needed.

    Raises:
        CommandLineTooLongError: If a single path can't fit on its own
    """
    sep_size = len(separator.encode("utf-8"))
    batch: List[str] = []
    size = 0
    for path in paths:
        cost = sep_size + len(path.encode("utf-8"))
        if cost > max_length:
            raise CommandLineTooLongError(path, max_length)
        if batch and size + cost > max_length:
            yield batch
            batch = []
            size = 0
        batch.append(path)
        size += cost
    if batch:
        yield batch


class CommandBatcher:
    """Adds files to a repository in as few add commands as the limit allows."""

    def __init__(self, backend: "VcsBackend", max_command_line: int):
        self.backend = backend
        self.max_command_line = max_command_line
        self.last_invocations = 0
        self.total_invocations = 0

    def add_files(self, paths: Sequence[str]) -> float:
        """Add paths, returning the summed elapsed seconds of the add commands."""
        elapsed = 0.0
        invocations = 0
        for batch in split_batches(paths, self.max_command_line):
            result = self.backend.add(batch)
            elapsed += result.elapsed
            invocations += 1
        if invocations > 1:
            logger.debug(f"Added {len(paths)} files in {invocations} commands")
        self.last_invocations = invocations
        self.total_invocations += invocations
        return elapsed
