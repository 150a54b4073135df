"""Logging configuration for the c2rust-clean CLI."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from c2rust_clean.models.config import Config

# Module-level state for session tracking
_session_id: str | None = None
_log_dir: Path | None = None
_session_log_file: Path | None = None
_initialized: bool = False

# Log format
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_LOG_DIR = Path.home() / ".c2rust-clean" / "logs"


def get_log_dir(config: Config | None = None) -> Path:
    """Get the logging directory, creating it if necessary."""
    global _log_dir  # noqa: PLW0603
    if _log_dir is None:
        _log_dir = config.log_dir if config and config.log_dir else DEFAULT_LOG_DIR
        _log_dir.mkdir(parents=True, exist_ok=True)
    return _log_dir


def get_session_id() -> str:
    """Get the current session ID, creating one if necessary."""
    global _session_id  # noqa: PLW0603
    if _session_id is None:
        timestamp = datetime.now(tz=UTC).strftime("%Y%m%d-%H%M%S")
        short_uuid = uuid.uuid4().hex[:8]
        _session_id = f"{timestamp}-{short_uuid}"
    return _session_id


def get_session_log_file() -> Path:
    """Get the session-specific log file path."""
    global _session_log_file  # noqa: PLW0603
    if _session_log_file is None:
        _session_log_file = get_log_dir() / f"c2rust-clean-{get_session_id()}.log"
    return _session_log_file


def setup_logging(config: Config | None = None) -> None:
    """Initialize the logging system.

    Args:
        config: Optional config to determine verbosity and log location. If
                verbose=True, logs DEBUG to the session file; otherwise INFO.
    """
    global _initialized  # noqa: PLW0603
    if _initialized:
        return

    log_level = logging.DEBUG if (config and config.verbose) else logging.INFO

    root_logger = logging.getLogger("c2rust_clean")
    root_logger.setLevel(logging.DEBUG)  # Capture everything; handlers filter
    root_logger.handlers.clear()

    # 1. Session-specific file handler
    get_log_dir(config)
    session_file = get_session_log_file()
    session_handler = logging.FileHandler(session_file, encoding="utf-8")
    session_handler.setLevel(log_level)
    session_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    root_logger.addHandler(session_handler)

    # 2. Rotating combined log
    combined_log = get_log_dir() / "c2rust-clean.log"
    rotating_handler = RotatingFileHandler(
        combined_log,
        maxBytes=10 * 1024 * 1024,  # 10 MB per file
        backupCount=5,
        encoding="utf-8",
    )
    rotating_handler.setLevel(logging.INFO)
    rotating_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    root_logger.addHandler(rotating_handler)

    _initialized = True

    root_logger.info(f"Session {get_session_id()} started in {Path.cwd()}")


def reset_logging() -> None:
    """Drop handlers and session state so the next setup starts fresh."""
    global _session_id, _log_dir, _session_log_file, _initialized  # noqa: PLW0603
    root_logger = logging.getLogger("c2rust_clean")
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)
    _session_id = None
    _log_dir = None
    _session_log_file = None
    _initialized = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module.

    Args:
        name: Module name (e.g., "c2rust_clean.services.executor")

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def log_subprocess_result(
    logger: logging.Logger,
    cmd: list[str] | str,
    exit_code: int,
    stdout: str | None = None,
    stderr: str | None = None,
    success: bool = True,
) -> None:
    """Log the result of a subprocess call.

    Args:
        logger: The logger to use
        cmd: Command that was executed
        exit_code: Process exit code
        stdout: Captured stdout (if any)
        stderr: Captured stderr (if any)
        success: Whether the operation succeeded
    """
    cmd_str = cmd if isinstance(cmd, str) else " ".join(cmd)
    level = logging.DEBUG if success else logging.WARNING

    logger.log(level, f"Subprocess: {cmd_str}")
    logger.log(level, f"  Exit code: {exit_code}")

    if stdout and stdout.strip():
        for line in stdout.strip().split("\n")[:50]:  # Limit to 50 lines
            logger.log(level, f"  stdout: {line}")
        if stdout.strip().count("\n") > 50:
            logger.log(level, "  stdout: ... (truncated)")

    if stderr and stderr.strip():
        for line in stderr.strip().split("\n")[:50]:
            logger.log(level, f"  stderr: {line}")
        if stderr.strip().count("\n") > 50:
            logger.log(level, "  stderr: ... (truncated)")


def cleanup_old_logs(max_age_days: int = 30) -> None:
    """Remove session log files older than max_age_days.

    Args:
        max_age_days: Delete logs older than this many days
    """
    log_dir = get_log_dir()
    cutoff = datetime.now(tz=UTC).timestamp() - (max_age_days * 24 * 60 * 60)

    logger = get_logger("c2rust_clean.logging")

    for log_file in log_dir.glob("c2rust-clean-*.log"):
        if _session_log_file and log_file == _session_log_file:
            continue

        try:
            if log_file.stat().st_mtime < cutoff:
                log_file.unlink()
                logger.debug(f"Cleaned up old log file: {log_file}")
        except OSError as e:
            logger.warning(f"Failed to clean up log file {log_file}: {e}")
