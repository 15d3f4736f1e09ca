"""Custom exceptions for vcs-torture"""

from typing import Optional, Sequence


class VcsTortureError(Exception):
    """Base exception for all vcs-torture errors."""
    pass


class ConfigError(VcsTortureError):
    """Exception raised for missing or invalid configuration."""
    pass


class WorktreeError(VcsTortureError):
    """Exception raised when the worktree can't be written."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        self.message = message

        error_msg = f"Couldn't write {path}"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class ContentGenerationError(VcsTortureError):
    """Exception raised when generated content has the wrong size."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Generated {actual} bytes of content, expected {expected}")


class CommandError(VcsTortureError):
    """Base exception for external command problems."""
    pass


class ExecutableNotFoundError(CommandError):
    """Exception raised when an executable can't be found or started."""

    def __init__(self, executable: str, message: Optional[str] = None):
        self.executable = executable
        self.message = message

        error_msg = f"Not installed: {executable}"
        if message:
            error_msg += f" ({message})"

        super().__init__(error_msg)


class CommandFailedError(CommandError):
    """Exception raised when an external command exits with non-zero status."""

    def __init__(self, command: Sequence[str], status: int, stdout: str = "", stderr: str = ""):
        self.command = list(command)
        self.status = status
        self.stdout = stdout
        self.stderr = stderr

        super().__init__(f"{' '.join(self.command)} failed with exit status {status}")


class CommandLineTooLongError(CommandError):
    """Exception raised when a single argument can't fit on a command line."""

    def __init__(self, path: str, max_length: int):
        self.path = path
        self.max_length = max_length
        super().__init__(f"Path '{path}' doesn't fit in a {max_length} byte command line")


class UnsupportedOperationError(VcsTortureError):
    """Exception raised for operations a version control system doesn't support here."""

    def __init__(self, vcs: str, operation: str):
        self.vcs = vcs
        self.operation = operation
        super().__init__(f"Operation '{operation}' is not supported for {vcs}")


class WorkingDirectoryError(CommandError):
    """Exception raised when a command's working directory doesn't exist."""

    def __init__(self, cwd: str):
        self.cwd = cwd
        super().__init__(f"Working directory {cwd} is missing or not a directory")
