"""Runtime configuration for c2rust-clean."""

from dataclasses import dataclass
from pathlib import Path

DEFAULT_FEATURE = "default"
DEFAULT_CONFIG_TOOL = "c2rust-config"
CONFIG_DIR_NAME = ".c2rust"

# Values of the disable switch that keep auto-commit enabled (exact match)
AUTO_COMMIT_ENABLED_VALUES = ("", "0", "false")


@dataclass
class Config:
    """Runtime configuration for a c2rust-clean run."""

    # Project root override (C2RUST_PROJECT_ROOT)
    project_root: str | None = None

    # External config store (C2RUST_CONFIG)
    config_tool: str = DEFAULT_CONFIG_TOOL

    # Git settings
    auto_commit: bool = True

    # Output settings
    verbose: bool = False

    # Paths
    log_dir: Path | None = None


def auto_commit_enabled(disable_value: str | None) -> bool:
    """Return whether auto-commit stays on for a given disable-switch value."""
    if disable_value is None:
        return True
    return disable_value in AUTO_COMMIT_ENABLED_VALUES


# Global config instance (can be overridden via CLI)
_config: Config | None = None


def get_config() -> Config:
    """Get the current configuration, creating a default if none exists."""
    global _config  # noqa: PLW0603
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration."""
    global _config  # noqa: PLW0603
    _config = config
