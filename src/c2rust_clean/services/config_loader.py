"""Environment-driven configuration loader for c2rust-clean."""

import os
from pathlib import Path

from c2rust_clean.logging_config import get_logger
from c2rust_clean.models.config import DEFAULT_CONFIG_TOOL, Config, auto_commit_enabled

logger = get_logger("c2rust_clean.services.config_loader")

PROJECT_ROOT_ENV = "C2RUST_PROJECT_ROOT"
CONFIG_TOOL_ENV = "C2RUST_CONFIG"
DISABLE_AUTO_COMMIT_ENV = "C2RUST_DISABLE_AUTO_COMMIT"
LOG_DIR_ENV = "C2RUST_CLEAN_LOG_DIR"
VERBOSE_ENV = "C2RUST_CLEAN_VERBOSE"


def load_config(*, verbose: bool = False) -> Config:
    """Build the runtime configuration from the environment.

    Environment variables:
    - C2RUST_PROJECT_ROOT: project root override
    - C2RUST_CONFIG: path or name of the c2rust-config tool
    - C2RUST_DISABLE_AUTO_COMMIT: any value but "", "0" or "false" disables auto-commit
    - C2RUST_CLEAN_LOG_DIR: directory for log files
    - C2RUST_CLEAN_VERBOSE: "1", "true" or "yes" to log DEBUG

    Args:
        verbose: Force DEBUG logging regardless of the environment

    Returns:
        Config with values from the environment or defaults.
    """
    env_verbose = os.environ.get(VERBOSE_ENV, "")
    env_log_dir = os.environ.get(LOG_DIR_ENV)

    return Config(
        project_root=os.environ.get(PROJECT_ROOT_ENV) or None,
        config_tool=os.environ.get(CONFIG_TOOL_ENV) or DEFAULT_CONFIG_TOOL,
        auto_commit=auto_commit_enabled(os.environ.get(DISABLE_AUTO_COMMIT_ENV)),
        verbose=verbose or env_verbose.lower() in ("1", "true", "yes"),
        log_dir=Path(env_log_dir).expanduser() if env_log_dir else None,
    )
