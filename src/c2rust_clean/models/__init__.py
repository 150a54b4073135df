"""Data models for c2rust-clean."""

from c2rust_clean.models.config import Config
from c2rust_clean.models.invocation import (
    CommitOutcome,
    CommitStatus,
    ExecutionResult,
    ResolvedInvocation,
)

__all__ = ["CommitOutcome", "CommitStatus", "Config", "ExecutionResult", "ResolvedInvocation"]
