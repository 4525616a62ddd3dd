"""Produce CLI commands - thin wrappers orchestrating params, display and service."""

from __future__ import annotations

import asyncio

import typer

from ...config import ConfigurationError
from ...constants import DEFAULT_BATCH_COUNT
from ..core.console import console, print_error, print_header
from ..core.context import build_producer, build_publisher, get_state
from ..core.types import Failure
from ..publish.commands import run_publish
from .display import (
    show_batch_aborted,
    show_batch_item,
    show_produce_config,
    show_production_error,
    show_production_result,
)
from .params import BatchParams
from .service import ProducerService


def generate(ctx: typer.Context) -> None:
    """Produce one meme short into the pending queue.

    Meant to run every few hours from cron:

        0 */4 * * * meme-shorts generate
    """
    settings = get_state(ctx).settings()

    print_header("Generating video")
    show_produce_config(console, settings)

    producer = build_producer(settings)
    result = asyncio.run(ProducerService().produce_one(producer))

    if isinstance(result, Failure):
        show_production_error(console, result.error, result.details)
        raise typer.Exit(1)

    show_production_result(console, result.value)
    console.print("[dim]Run 'meme-shorts upload' when ready to schedule uploads[/dim]")


def batch(
    ctx: typer.Context,
    count: int = typer.Option(DEFAULT_BATCH_COUNT, "--count", "-n", help="Number of videos to produce"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Produce, then only preview the upload schedule"),
    fail_on_error: bool = typer.Option(False, "--fail-on-error", help="Exit 2 if any upload fails"),
) -> None:
    """Produce N videos, then publish the whole queue."""
    try:
        params = BatchParams.from_cli(count=count, dry_run=dry_run, fail_on_error=fail_on_error)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    settings = get_state(ctx).settings()

    # Check the publisher before spending time on production
    try:
        publisher = build_publisher(settings)
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(1)
    if not params.dry_run:
        configured, message = publisher.is_configured()
        if not configured:
            print_error(message)
            raise typer.Exit(1)

    print_header(f"Generating {params.count} video(s)")
    show_produce_config(console, settings, params.count)

    def on_item(index, result):
        if isinstance(result, Failure):
            show_batch_item(console, index, params.count, None, result.error)
        else:
            show_batch_item(console, index, params.count, result.value.output_path.name, None)

    producer = build_producer(settings)
    batch_result = asyncio.run(ProducerService().produce_batch(producer, params.count, on_item))

    if batch_result.aborted:
        show_batch_aborted(console, batch_result, params.count)
        raise typer.Exit(1)

    run_publish(settings, publisher, params.dry_run, params.fail_on_error)
