"""c2rust-clean CLI - C project build artifact cleaning tool for c2rust."""

import typer

from c2rust_clean import __version__
from c2rust_clean.commands.clean import clean
from c2rust_clean.console import console
from c2rust_clean.logging_config import cleanup_old_logs, get_logger, setup_logging
from c2rust_clean.models.config import set_config
from c2rust_clean.services.config_loader import load_config

# Create the Typer app
app = typer.Typer(
    name="c2rust-clean",
    help="C project build artifact cleaning tool for c2rust.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Everything after the first positional belongs to the clean command
app.command(name="clean", context_settings={"allow_interspersed_args": False})(clean)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Write DEBUG details to the session log",
    ),
) -> None:
    """c2rust-clean - C project build artifact cleaning tool for c2rust.

    Runs your clean command in the project's build directory, saves it with
    c2rust-config, and commits the saved configuration when .c2rust is a git
    repository.
    """
    if version:
        console.print(f"c2rust-clean version {__version__}")
        raise typer.Exit()

    config = load_config(verbose=verbose)
    set_config(config)

    setup_logging(config)
    cleanup_old_logs(max_age_days=30)

    logger = get_logger("c2rust_clean.cli")

    if ctx.invoked_subcommand:
        logger.info(f"Command invoked: {ctx.invoked_subcommand}")

    # Show help if no command provided
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


if __name__ == "__main__":
    app()
