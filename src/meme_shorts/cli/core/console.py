"""Rich console singleton for CLI output."""

import sys

from rich.console import Console
from rich.markup import escape

# Windows cp1252 has no box drawing characters
_safe_box = sys.platform == "win32"

# Global console instance - used across all CLI modules
console = Console(safe_box=_safe_box)


def print_header(title: str) -> None:
    """Print a command banner."""
    console.print(f"\n[bold magenta]{title}[/bold magenta]")
    console.rule(style="magenta")


def print_error(message: str, details: dict | None = None) -> None:
    """Print an error message, with optional key/value details."""
    console.print(f"[red]Error: {escape(message)}[/red]")
    for key, value in (details or {}).items():
        console.print(f"  [dim]{key}:[/dim] [yellow]{value}[/yellow]")


def print_warning(message: str) -> None:
    console.print(f"[yellow]Warning: {escape(message)}[/yellow]")


def print_success(message: str) -> None:
    console.print(f"[green]{message}[/green]")


def print_info(message: str) -> None:
    console.print(f"[cyan]{message}[/cyan]")
