"""CLI commands for c2rust-clean."""

from c2rust_clean.commands.clean import clean

__all__ = ["clean"]
