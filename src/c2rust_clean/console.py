"""Rich console singletons and helpers for terminal output."""

from rich.console import Console
from rich.markup import escape

# Global console instances
console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓ {escape(message)}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[red]Error: {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[yellow]Warning: {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{escape(message)}[/blue]")


def print_detail(label: str, value: object) -> None:
    """Print a `label: value` diagnostic line on stderr."""
    err_console.print(f"[dim]{escape(label)}:[/dim] {escape(str(value))}")


def print_command_banner(command: str, directory: str) -> None:
    """Print the command about to run and where it runs."""
    console.print(f"Executing command: [cyan]{escape(command)}[/cyan]")
    console.print(f"In directory: [cyan]{escape(directory)}[/cyan]")
    console.print()


def print_exit_code(exit_code: int) -> None:
    """Print the exit status reported by the clean command."""
    style = "green" if exit_code == 0 else "red"
    console.print()
    console.print(f"[{style}]Exit code: {exit_code}[/{style}]")
