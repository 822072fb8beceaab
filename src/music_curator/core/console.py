"""Shared Rich Console for the CLI and user-facing output."""

from rich.console import Console

_console: Console | None = None


def get_console() -> Console:
    """Get or create the shared Rich Console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def safe_print(message: str, style: str | None = None, markup: bool = True) -> None:
    """Print using Rich Console with optional styling.

    Args:
        message: The message to print
        style: Optional Rich style string (e.g., "bold red", "green")
        markup: Interpret Rich markup; disable for raw tag text
    """
    get_console().print(message, style=style, markup=markup)


def print_error(message: str) -> None:
    """Print an error message in the CLI's error style."""
    safe_print(f"❌ {message}", style="bold red", markup=False)
