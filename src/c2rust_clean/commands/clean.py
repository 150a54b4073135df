"""Clean command - run the project's clean command and remember it."""

from pathlib import Path
from typing import Annotated

import typer

from c2rust_clean.console import (
    err_console,
    print_command_banner,
    print_detail,
    print_error,
    print_exit_code,
    print_info,
    print_success,
    print_warning,
)
from c2rust_clean.exceptions import CleanError, CommandFailedError, DirectoryNotFoundError
from c2rust_clean.logging_config import get_logger
from c2rust_clean.models.config import CONFIG_DIR_NAME, DEFAULT_FEATURE, get_config
from c2rust_clean.models.invocation import CommitOutcome, CommitStatus, ResolvedInvocation
from c2rust_clean.services.config_store import C2RustConfigStore
from c2rust_clean.services.executor import execute
from c2rust_clean.services.git import GitService
from c2rust_clean.services.project_root import relative_dir, resolve_root
from c2rust_clean.services.reconciler import persist, reconcile

logger = get_logger("c2rust_clean.commands.clean")


def clean(
    clean_cmd: list[str] | None = typer.Argument(
        None,
        help="Clean command to execute. Put it after -- so its own options are kept.",
        show_default=False,
    ),
    feature: Annotated[
        str,
        typer.Option("--feature", help="Configuration namespace to read and save"),
    ] = DEFAULT_FEATURE,
    directory: Annotated[
        Path | None,
        typer.Option(
            "--dir",
            help="Directory to run the command in (default: stored value, else current directory)",
        ),
    ] = None,
    no_auto_commit: Annotated[
        bool,
        typer.Option("--no-auto-commit", help="Do not commit .c2rust changes after cleaning"),
    ] = False,
) -> None:
    """Execute clean command.

    Runs CLEAN_CMD in the clean directory and saves both as clean.dir and
    clean for the feature, so a bare `c2rust-clean clean` repeats the run.

    Examples:
        c2rust-clean clean -- make clean
        c2rust-clean clean --dir build -- make clean
        c2rust-clean clean --feature debug -- make -C debug clean
        c2rust-clean clean                       # replay the saved command
    """
    config = get_config()
    cwd = Path.cwd().resolve()

    try:
        root = resolve_root(cwd, config.project_root).resolve()
        print_detail("Project root", root)
        print_detail("Feature", feature)

        store = C2RustConfigStore(project_root=root, tool=config.config_tool)
        store.ensure_dependencies()

        cli_dir = (cwd / directory).resolve() if directory is not None else None
        invocation = reconcile(
            store,
            feature,
            root,
            cli_dir=cli_dir,
            cli_command=clean_cmd,
            default_dir=cwd,
        )
        print_detail("Relative clean directory", relative_dir(invocation.directory, root))

        if not invocation.directory.is_dir():
            raise DirectoryNotFoundError(invocation.directory)

        persist(store, feature, invocation, root)
        print_success("Configuration saved")

        _run(invocation)
    except KeyboardInterrupt:
        print_warning("Interrupted.")
        logger.warning("Run interrupted by user")
        raise typer.Exit(130) from None
    except CommandFailedError as e:
        print_error(str(e))
        logger.error(str(e))
        raise typer.Exit(e.exit_code) from e
    except CleanError as e:
        print_error(str(e))
        logger.error(str(e))
        raise typer.Exit(1) from e

    outcome = GitService().maybe_commit(
        root / CONFIG_DIR_NAME,
        enabled=config.auto_commit and not no_auto_commit,
    )
    _report_commit(outcome)

    print_success("Clean command executed successfully.")


def _run(invocation: ResolvedInvocation) -> None:
    """Execute the invocation, always reporting the exit code."""
    print_command_banner(invocation.command_line, str(invocation.directory))
    try:
        result = execute(invocation.directory, invocation.command)
    except CommandFailedError as e:
        print_exit_code(e.exit_code)
        raise
    print_exit_code(result.exit_code)
    logger.info(f"Clean command took {result.duration:.2f}s")


def _report_commit(outcome: CommitOutcome) -> None:
    """Tell the user what auto-commit did. Never fails the run."""
    if outcome.status is CommitStatus.COMMITTED:
        print_info(f"Committed .c2rust changes: {outcome.detail}")
    elif outcome.status is CommitStatus.WARNED:
        print_warning(f"Auto-commit failed: {outcome.detail}")
        err_console.print("Continuing without auto-commit.", markup=False)
    else:
        logger.debug(f"Auto-commit {outcome.status.value}: {outcome.detail}")
