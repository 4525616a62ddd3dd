"""Shared CLI state and wiring of settings into services."""

from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from ...config import AppSettings, ConfigurationError, load_settings
from ...media.composer import MediaComposer
from ...platforms import PlatformPublisher, PlatformRegistry
from ...production.producer import Producer
from ...queue.pending import PendingQueue
from ...sources.downloader import ImageDownloader
from ...sources.reddit import create_meme_source
from .console import print_error


@dataclass
class CliState:
    """Values from global options, kept on ``ctx.obj``."""

    config_path: Optional[Path] = None
    _settings: Optional[AppSettings] = None

    def settings(self) -> AppSettings:
        """Load settings once per invocation. Exits 1 when invalid."""
        if self._settings is None:
            try:
                self._settings = load_settings(self.config_path)
            except ConfigurationError as e:
                print_error(str(e))
                raise typer.Exit(1)
        return self._settings


def get_state(ctx: typer.Context) -> CliState:
    if not isinstance(ctx.obj, CliState):
        ctx.obj = CliState()
    return ctx.obj


def build_queue(settings: AppSettings) -> PendingQueue:
    return PendingQueue(settings.paths.output)


def build_publisher(settings: AppSettings) -> PlatformPublisher:
    """Publisher for the configured platform.

    Raises:
        ConfigurationError: Unknown platform.
    """
    try:
        config = PlatformRegistry.load_config(
            settings.platform,
            settings.paths.base_dir,
            settings.platforms,
        )
        return PlatformRegistry.get_publisher(settings.platform, config)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def build_producer(settings: AppSettings, rng: Optional[random.Random] = None) -> Producer:
    reddit = settings.reddit
    source = create_meme_source(
        sources=reddit.sources,
        client_id=reddit.get_client_id(),
        client_secret=reddit.get_client_secret(),
        user_agent=reddit.user_agent,
        pick_from_top=reddit.pick_from_top,
        rng=rng,
    )
    return Producer(
        queue=build_queue(settings),
        source=source,
        downloader=ImageDownloader(),
        composer=MediaComposer(settings.video),
        backgrounds_dir=settings.paths.backgrounds,
        music_dir=settings.paths.music,
        temp_dir=settings.paths.temp,
        rng=rng,
    )
