"""External command execution with timing"""
import os
import shutil
import time
from typing import Dict, List, Optional, Sequence

import git
from rich.console import Console

from vcs_torture.exceptions import (
    CommandFailedError,
    ExecutableNotFoundError,
    WorkingDirectoryError,
)
from vcs_torture.logging_config import get_logger
from vcs_torture.models.repo import CommandResult

console = Console()
logger = get_logger(__name__)


class ExecutableResolver:
    """Finds executables on PATH, remembering each lookup.

    Some operating systems are slow to search PATH, so one resolver is
    created per process and handed to every CommandRunner.
    """

    def __init__(self, search_path: Optional[str] = None):
        self.search_path = search_path
        self._paths: Dict[str, str] = {}

    def resolve(self, executable: str) -> str:
        """Return the full path of executable.

        Raises:
            ExecutableNotFoundError: If it isn't installed
        """
        path = self._paths.get(executable)
        if path is not None:
            return path

        path = shutil.which(executable, path=self.search_path)
        if path is None:
            raise ExecutableNotFoundError(executable)
        logger.debug(f"Resolved {executable} to {path}")
        self._paths[executable] = path
        return path

    def clear(self):
        self._paths.clear()


def format_output(stdout: str, stderr: str) -> List[str]:
    """Lines of captured output, stderr lines marked."""
    lines = list(stdout.splitlines())
    lines.extend(f"(stderr): {line}" for line in stderr.splitlines())
    return lines


class CommandRunner:
    """Runs external commands one at a time, measuring each.

    Commands run through GitPython's process layer, which captures stdout
    and stderr. Elapsed time comes from time.perf_counter so clock
    adjustments can't skew it. Children start in their own session so a
    terminal interrupt reaches only this process; an in-flight command
    always runs to completion.
    """

    def __init__(
        self,
        resolver: Optional[ExecutableResolver] = None,
        verbose: bool = False,
        start_time: Optional[float] = None,
    ):
        self.resolver = resolver or ExecutableResolver()
        self.verbose = verbose
        self.start_time = time.perf_counter() if start_time is None else start_time

    def run(
        self,
        executable: str,
        args: Sequence[str],
        cwd: str,
        env: Optional[Dict[str, str]] = None,
    ) -> CommandResult:
        """Run executable with args in cwd.

        Args:
            executable: Program name, looked up through the resolver
            args: Command arguments
            cwd: Working directory
            env: Extra environment variables

        Returns:
            CommandResult with elapsed time and captured output

        Raises:
            ExecutableNotFoundError: If the program can't be found or started
            CommandFailedError: If the program exits with non-zero status
            WorkingDirectoryError: If cwd isn't a directory
        """
        # GitPython silently falls back to the current directory for a bad cwd
        if not os.path.isdir(cwd):
            raise WorkingDirectoryError(str(cwd))
        exe_path = self.resolver.resolve(executable)
        command = [exe_path, *args]
        proc = git.cmd.Git(str(cwd))

        start = time.perf_counter()
        try:
            status, stdout, stderr = proc.execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
                env=env,
                start_new_session=True,
            )
        except git.exc.GitCommandNotFound as e:
            raise ExecutableNotFoundError(executable, str(e)) from e
        elapsed = time.perf_counter() - start

        if status != 0:
            raise CommandFailedError([executable, *args], status, stdout, stderr)

        result = CommandResult(elapsed=elapsed, stdout=stdout, stderr=stderr)
        self._report(executable, args, result)
        return result

    def _report(self, executable: str, args: Sequence[str], result: CommandResult):
        since_start = time.perf_counter() - self.start_time
        logger.info(
            f"T+{since_start:.2f}: (elapsed={result.elapsed:.4f}) {executable} {_summarize_args(args)}"
        )
        if self.verbose:
            for line in format_output(result.stdout, result.stderr):
                console.print(line, markup=False, highlight=False)


def _summarize_args(args: Sequence[str], limit: int = 6) -> str:
    """Join args for logging, eliding long path lists."""
    if len(args) <= limit:
        return " ".join(args)
    return " ".join(args[:limit]) + f" ... (+{len(args) - limit} more)"
