"""Merge CLI arguments with stored clean configuration."""

import shlex
from collections.abc import Sequence
from pathlib import Path

from c2rust_clean.exceptions import ConfigIOError, MissingRequiredArgumentError
from c2rust_clean.logging_config import get_logger
from c2rust_clean.models.invocation import ResolvedInvocation
from c2rust_clean.services.config_store import KEY_CLEAN_CMD, KEY_CLEAN_DIR, ConfigStore
from c2rust_clean.services.project_root import relative_dir

logger = get_logger("c2rust_clean.services.reconciler")


def _stored_command(store: ConfigStore, feature: str) -> tuple[str, ...] | None:
    raw = store.get(feature, KEY_CLEAN_CMD)
    if raw is None or not raw.strip():
        return None
    try:
        return tuple(shlex.split(raw))
    except ValueError as e:
        raise ConfigIOError(f"Stored {KEY_CLEAN_CMD} is not a valid command line: {raw!r}") from e


def _stored_directory(store: ConfigStore, feature: str, root: Path) -> Path | None:
    raw = store.get(feature, KEY_CLEAN_DIR)
    if raw is None or not raw.strip():
        return None
    # Absolute values replace the root on join
    return root / raw


def reconcile(
    store: ConfigStore,
    feature: str,
    root: Path,
    cli_dir: Path | None = None,
    cli_command: Sequence[str] | None = None,
    default_dir: Path | None = None,
) -> ResolvedInvocation:
    """Build the invocation for this run.

    Each field takes the explicit CLI value first, then the value stored under
    `feature`. The directory additionally falls back to `default_dir`.

    Args:
        store: Config store to read stored values from
        feature: Feature namespace
        root: Project root that stored directories are relative to
        cli_dir: Directory given on the command line (absolute)
        cli_command: Command given on the command line
        default_dir: Directory used when neither source provides one

    Returns:
        The resolved invocation. Nothing is written to the store.

    Raises:
        MissingRequiredArgumentError: If the command or directory is still unknown
        ConfigIOError: If the stored values cannot be read or parsed
    """
    command: tuple[str, ...] | None = tuple(cli_command) if cli_command else None
    if command is None:
        command = _stored_command(store, feature)
        if command is not None:
            logger.debug(f"Using stored {KEY_CLEAN_CMD} for feature '{feature}'")
    if not command:
        raise MissingRequiredArgumentError(
            "CLEAN_CMD",
            "pass the clean command after '--' or save one for this feature first",
        )

    directory = cli_dir
    if directory is None:
        directory = _stored_directory(store, feature, root)
        if directory is not None:
            logger.debug(f"Using stored {KEY_CLEAN_DIR} for feature '{feature}'")
    if directory is None:
        directory = default_dir
    if directory is None:
        raise MissingRequiredArgumentError("--dir", "no clean directory given or stored")

    return ResolvedInvocation(directory=directory, command=command)


def persist(
    store: ConfigStore,
    feature: str,
    invocation: ResolvedInvocation,
    root: Path,
) -> None:
    """Write the reconciled pair back so a bare invocation replays it."""
    store.set(feature, KEY_CLEAN_DIR, relative_dir(invocation.directory, root))
    store.set(feature, KEY_CLEAN_CMD, invocation.command_line)
    logger.info(
        f"Persisted clean configuration for feature '{feature}': "
        f"{relative_dir(invocation.directory, root)} -> {invocation.command_line}"
    )
