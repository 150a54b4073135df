"""Custom exceptions for c2rust-clean."""

from pathlib import Path


class CleanError(Exception):
    """Base exception for all c2rust-clean errors."""


class MissingRequiredArgumentError(CleanError):
    """Raised when neither the CLI nor the stored configuration supplies a field."""

    def __init__(self, field: str, hint: str | None = None) -> None:
        self.field = field
        message = f"Missing required argument: {field}"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)


class DirectoryNotFoundError(CleanError):
    """Raised when the clean directory does not exist or is not a directory."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Clean directory does not exist: {path}")


class DependencyMissingError(CleanError):
    """Raised when a required external dependency is not installed."""

    def __init__(self, dependencies: list[str]) -> None:
        self.dependencies = dependencies
        deps_str = ", ".join(dependencies)
        super().__init__(f"{deps_str} not found. Please install {deps_str} first.")


class ConfigIOError(CleanError):
    """Raised when reading from or writing to the config store fails."""


class CommandFailedError(CleanError):
    """Raised when the clean command exits with a non-zero status."""

    def __init__(self, exit_code: int, command: str = "") -> None:
        self.exit_code = exit_code
        self.command = command
        label = f"Command '{command}'" if command else "Clean command"
        super().__init__(f"{label} failed with exit code {exit_code}")


class CommandSpawnError(CleanError):
    """Raised when the clean command cannot be started."""

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        self.reason = reason
        super().__init__(f"Failed to execute command '{command}': {reason}")


class GitCommandError(CleanError):
    """Raised when a git operation on the configuration directory fails."""
