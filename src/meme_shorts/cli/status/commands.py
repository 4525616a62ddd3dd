"""Status CLI command."""

from __future__ import annotations

import typer

from ...config import AppSettings, ConfigurationError, load_settings
from ..core.console import console, print_warning
from ..core.context import build_queue, get_state
from .display import show_status


def status(ctx: typer.Context) -> None:
    """List pending videos. Never fails."""
    state = get_state(ctx)
    try:
        settings = load_settings(state.config_path)
    except ConfigurationError as e:
        print_warning(f"{e} - using defaults")
        # Built without reading the environment, which may be what failed.
        settings = AppSettings.model_construct()

    queue = build_queue(settings)
    show_status(console, queue.directory, queue.list_pending())
