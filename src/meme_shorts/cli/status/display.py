"""Display functions for the status command."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table

from ...queue.pending import Artifact


def show_status(console: Console, queue_dir: Path, artifacts: list[Artifact]) -> None:
    """Pending queue contents, oldest first."""
    console.print(f"[bold]Queue:[/bold] [dim]{queue_dir}[/dim]")
    console.print(f"[bold]Pending videos:[/bold] [cyan]{len(artifacts)}[/cyan]")

    if not artifacts:
        return

    table = Table()
    table.add_column("#", style="dim", justify="right")
    table.add_column("File", style="cyan")
    table.add_column("Created (UTC)")
    table.add_column("Size", justify="right")
    table.add_column("Credits", justify="center")

    for i, artifact in enumerate(artifacts, start=1):
        table.add_row(
            str(i),
            artifact.name,
            artifact.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            f"{artifact.size_bytes / (1024 * 1024):.1f} MB",
            "yes" if artifact.sidecar_path.exists() else "-",
        )

    console.print(table)
