"""Display functions for publish commands - pure functions for Rich output."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...constants import PublishStatus
from ...publishing.orchestrator import PublishOutcome
from ...scheduling.schedule import PublishSlot


def offset_label(offset_hours: int) -> str:
    return f"UTC{offset_hours:+d}"


def format_slot(slot: PublishSlot, offset_hours: int) -> str:
    return slot.local_time(offset_hours).strftime("%a %Y-%m-%d %H:%M")


def show_no_pending(console: Console) -> None:
    console.print("[yellow]No pending videos to upload[/yellow]")
    console.print("[dim]Generate videos first with: meme-shorts generate[/dim]")


def show_schedule_table(console: Console, slots: list[PublishSlot], offset_hours: int) -> None:
    """Table of computed slots."""
    table = Table(title="Publish Schedule")
    table.add_column("#", style="dim", justify="right")
    table.add_column(f"Local ({offset_label(offset_hours)})", style="cyan")
    table.add_column("UTC", style="dim")

    for slot in slots:
        table.add_row(str(slot.index + 1), format_slot(slot, offset_hours), slot.to_rfc3339())

    console.print(table)


def show_outcome(console: Console, index: int, total: int, outcome: PublishOutcome, offset_hours: int) -> None:
    """Progress line for one outcome as it happens."""
    when = format_slot(outcome.slot, offset_hours)
    name = outcome.artifact.name

    if outcome.status == PublishStatus.PLANNED:
        console.print(f"  [{index}/{total}] [dim]PLAN[/dim] {name} -> {when}")
    elif outcome.status == PublishStatus.SCHEDULED:
        console.print(f"  [{index}/{total}] [green]OK[/green] {name} -> {when} [dim]{outcome.video_url or ''}[/dim]")
        if outcome.removal_error:
            console.print(f"        [yellow]Uploaded but not deleted: {outcome.removal_error}[/yellow]")
    else:
        kind = outcome.error_kind.value if outcome.error_kind else "unknown"
        console.print(f"  [{index}/{total}] [red]FAILED[/red] {name} \\[{kind}] {escape(outcome.error or '')}")
        console.print("        [dim]Keeping for retry[/dim]")


def show_publish_summary(console: Console, counts: dict[str, int], dry_run: bool) -> None:
    console.print()
    if dry_run:
        console.print(f"[cyan]Dry run - {counts['planned']} video(s) planned, nothing uploaded[/cyan]")
        return

    style = "green" if counts["failed"] == 0 else "yellow"
    console.print(f"[{style}]Scheduled: {counts['scheduled']} | Failed: {counts['failed']}[/{style}]")
