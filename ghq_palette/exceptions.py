"""Custom exceptions for ghq-palette"""

from typing import Optional, Sequence


class GhqPaletteError(Exception):
    """Base exception for all ghq-palette errors."""
    pass


class CommandError(GhqPaletteError):
    """Exception raised when an external command exits with a non-zero status."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: Optional[int] = None,
        stderr: str = "",
        stdout: str = "",
    ):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        self.stdout = stdout

        detail = stderr or stdout
        error_msg = f"Command '{' '.join(self.command)}' failed"
        if returncode is not None:
            error_msg += f" (exit {returncode})"
        if detail:
            error_msg += f": {detail}"

        super().__init__(error_msg)


class CommandTimeoutError(CommandError):
    """Exception raised when an external command does not finish in time."""

    def __init__(self, command: Sequence[str], timeout: float):
        self.timeout = timeout
        super().__init__(command, stderr=f"timed out after {timeout:g}s")


class CommandNotFoundError(CommandError):
    """Exception raised when the executable of a command cannot be found."""

    def __init__(self, command: Sequence[str]):
        super().__init__(command, stderr=f"command not found: {command[0]}")


class GitOperationError(GhqPaletteError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class BranchProtectedError(GitOperationError):
    """Exception raised when attempting to delete the checked-out branch."""

    def __init__(self, branch: str):
        super().__init__("delete_branch", branch, "Branch is currently checked out")


class RepoRootNotFoundError(GhqPaletteError):
    """Exception raised when neither `ghq root` nor the fallback root exist."""

    def __init__(self, message: str = "ghq root not found. Install ghq or ensure ~/ghq exists."):
        super().__init__(message)


class DirectoryExistsError(GhqPaletteError):
    """Exception raised when a new repository would overwrite an existing directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Directory already exists: {path}")


class ValidationError(GhqPaletteError):
    """Exception raised when user input fails validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class ConfigError(GhqPaletteError):
    """Exception raised for an unreadable or invalid configuration."""
    pass
