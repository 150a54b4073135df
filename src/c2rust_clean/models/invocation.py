"""Data models for a single clean run."""

import shlex
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class ResolvedInvocation:
    """The directory and command a run will execute."""

    directory: Path
    command: tuple[str, ...]

    @property
    def command_line(self) -> str:
        """The command as a single shell-quoted string."""
        return shlex.join(self.command)


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of running the clean command."""

    exit_code: int
    duration: float  # seconds


class CommitStatus(str, Enum):
    """Terminal states of the auto-commit agent."""

    COMMITTED = "committed"
    NO_CHANGES = "no_changes"
    SKIPPED = "skipped"
    WARNED = "warned"


@dataclass(frozen=True)
class CommitOutcome:
    """What the auto-commit agent did, and why."""

    status: CommitStatus
    detail: str = ""

    @classmethod
    def committed(cls, message: str) -> "CommitOutcome":
        return cls(CommitStatus.COMMITTED, message)

    @classmethod
    def no_changes(cls) -> "CommitOutcome":
        return cls(CommitStatus.NO_CHANGES)

    @classmethod
    def skipped(cls, reason: str) -> "CommitOutcome":
        return cls(CommitStatus.SKIPPED, reason)

    @classmethod
    def warned(cls, error: str) -> "CommitOutcome":
        return cls(CommitStatus.WARNED, error)
