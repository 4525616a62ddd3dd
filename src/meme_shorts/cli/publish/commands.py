"""Publish CLI commands - thin wrappers orchestrating display and service."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer

from ...config import AppSettings, ConfigurationError
from ...platforms import PlatformPublisher, PlatformRegistry
from ...platforms.youtube.auth import run_consent_flow
from ...publishing.orchestrator import PublishOutcome
from ..core.console import console, print_error, print_header, print_success
from ..core.context import build_publisher, build_queue, get_state
from .display import (
    show_no_pending,
    show_outcome,
    show_publish_summary,
    show_schedule_table,
)
from .service import PublishService, summarize

EXIT_ITEMS_FAILED = 2


def run_publish(
    settings: AppSettings,
    publisher: PlatformPublisher,
    dry_run: bool,
    fail_on_error: bool,
) -> None:
    """Publish the queue and exit according to the outcome policy."""
    offset = settings.schedule.utc_offset_hours
    seen = 0

    def on_progress(outcome: PublishOutcome) -> None:
        nonlocal seen
        seen += 1
        show_outcome(console, seen, total, outcome, offset)

    orchestrator = PublishService().orchestrator(settings, build_queue(settings), publisher, on_progress)
    pairs = orchestrator.plan()
    total = len(pairs)

    if total == 0:
        show_no_pending(console)
        return

    print_header(f"Publishing {total} pending video(s)" + (" (dry run)" if dry_run else ""))

    outcomes = asyncio.run(orchestrator.publish_all(dry_run=dry_run, pairs=pairs))

    if not outcomes:
        show_no_pending(console)
        return

    counts = summarize(outcomes)
    show_publish_summary(console, counts, dry_run)

    if fail_on_error and counts["failed"] > 0:
        raise typer.Exit(EXIT_ITEMS_FAILED)


def upload(
    ctx: typer.Context,
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the schedule without uploading"),
    fail_on_error: bool = typer.Option(False, "--fail-on-error", help="Exit 2 if any upload fails"),
) -> None:
    """Upload every pending video as private, scheduled across the peak window.

    Successful uploads are deleted locally. Failed ones stay queued and
    are retried by the next run.
    """
    settings = get_state(ctx).settings()

    try:
        publisher = build_publisher(settings)
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if not dry_run:
        configured, message = publisher.is_configured()
        if not configured:
            print_error(message, {"hint": "Run 'meme-shorts authorize' or set YOUTUBE_* env vars"})
            raise typer.Exit(1)

    run_publish(settings, publisher, dry_run, fail_on_error)


def schedule_preview(
    ctx: typer.Context,
    count: Optional[int] = typer.Option(None, "--count", "-n", min=1, help="Number of slots (default: pending count)"),
) -> None:
    """Show the publish slots videos would get if uploaded now."""
    settings = get_state(ctx).settings()
    service = PublishService()

    if count is None:
        count = build_queue(settings).count()
        if count == 0:
            show_no_pending(console)
            return

    slots = service.preview(settings, count)
    show_schedule_table(console, slots, settings.schedule.utc_offset_hours)


def authorize(
    ctx: typer.Context,
    no_browser: bool = typer.Option(False, "--no-browser", help="Print the consent URL instead of opening a browser"),
) -> None:
    """One-time YouTube OAuth consent; writes the token file."""
    settings = get_state(ctx).settings()
    config = PlatformRegistry.load_config("youtube", settings.paths.base_dir, settings.platforms)

    try:
        run_consent_flow(config, open_browser=not no_browser)
    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(1)

    # Reload the stored token the way uploads will.
    publisher = PlatformRegistry.get_publisher("youtube", config)
    valid, message = asyncio.run(publisher.check_credentials())
    if not valid:
        print_error(f"Stored token does not work: {message}")
        raise typer.Exit(1)

    print_success(f"Token stored at {config.token_file}")
