"""Console output for the non-interactive commands."""

from rich.console import Console
from rich.markup import escape

# Colour is dropped automatically when the stream is not a terminal
_stdout = Console(highlight=False, soft_wrap=True)
_stderr = Console(highlight=False, soft_wrap=True, stderr=True)


def success(message: str) -> None:
    _stdout.print(f"[green]✓[/] {escape(message)}")


def info(message: str) -> None:
    _stdout.print(f"[yellow]•[/] {escape(message)}")


def error(message: str) -> None:
    """Report a failure on stderr."""
    _stderr.print(f"[red]✗[/] {escape(message)}")
