"""Display functions for produce commands - pure functions for Rich output."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ...config import AppSettings
from ..core.types import BatchResult, ProductionResult


def show_produce_config(console: Console, settings: AppSettings, count: int = 1) -> None:
    """Display production configuration panel."""
    reddit = settings.reddit
    auth = "OAuth" if reddit.get_client_id() and reddit.get_client_secret() else "public JSON"
    console.print(Panel(
        f"Videos: [cyan]{count}[/cyan]\n"
        f"Size: [cyan]{settings.video.width}x{settings.video.height}[/cyan], "
        f"{settings.video.duration_seconds}s @ {settings.video.fps}fps\n"
        f"Reddit sources: [cyan]{len(reddit.sources)}[/cyan] ({auth})\n"
        f"Backgrounds: [dim]{settings.paths.backgrounds}[/dim]\n"
        f"Music: [dim]{settings.paths.music}[/dim]\n"
        f"Queue: [dim]{settings.paths.output}[/dim]",
        title="Meme Short Production",
        border_style="magenta",
    ))


def show_production_result(console: Console, result: ProductionResult) -> None:
    console.print(f"[green]Video created:[/green] {result.output_path.name} "
                  f"[dim]({result.duration_seconds:.1f}s)[/dim]")
    console.print(f"Total pending: [cyan]{result.pending_count}[/cyan] video(s)")


def show_production_error(console: Console, error: str, details: dict | None = None) -> None:
    console.print(Panel(
        f"[red]{escape(error)}[/red]",
        title="Production Failed",
        border_style="red",
    ))
    for key, value in (details or {}).items():
        console.print(f"  [dim]{key}:[/dim] [yellow]{value}[/yellow]")


def show_batch_item(console: Console, index: int, total: int, name: str | None, error: str | None) -> None:
    """One line per batch item."""
    if error:
        console.print(f"  [{index}/{total}] [red]FAILED[/red] {escape(error)}")
    else:
        console.print(f"  [{index}/{total}] [green]OK[/green] {name}")


def show_batch_aborted(console: Console, batch: BatchResult, total: int) -> None:
    console.print(
        f"\n[red]Batch aborted at video {batch.failed_at}/{total}.[/red] "
        f"{len(batch.produced)} video(s) stay queued. Publishing skipped."
    )
