"""Typer app configuration and logging setup."""

from __future__ import annotations

import logging
import warnings
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from ..constants import LOG_FILE_NAME, LOGS_DIR_NAME, get_project_root
from .core.context import CliState

# Load environment variables from .env file
load_dotenv()

# httpx cleanup noise when the event loop closes
warnings.filterwarnings("ignore", message=".*Event loop is closed.*")

# Create Typer app
app = typer.Typer(
    name="meme-shorts",
    help="Meme shorts generator and YouTube scheduler",
    add_completion=False,
)

APP_LOGGERS = [
    "meme_shorts",
    "youtube_api",
    "reddit_api",
]

NOISY_LOGGERS = [
    "httpx",
    "httpcore",
    "urllib3",
    "asyncio",
    "googleapiclient",
    "googleapiclient.discovery_cache",
    "asyncprawcore",
    "asyncpraw",
]


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML settings file (default: config/settings.yaml)",
    ),
) -> None:
    """Produce meme shorts and schedule them on YouTube."""
    ctx.obj = CliState(config_path=config)


def register_commands() -> None:
    """Register all commands from feature modules."""
    from .produce.commands import batch, generate

    app.command(name="generate")(generate)
    app.command(name="batch")(batch)

    from .publish.commands import authorize, schedule_preview, upload

    app.command(name="upload")(upload)
    app.command(name="schedule-preview")(schedule_preview)
    app.command(name="authorize")(authorize)

    from .status.commands import status

    app.command(name="status")(status)


def setup_logging(log_dir: Optional[Path] = None) -> None:
    """Configure logging for CLI.

    - Suppresses console output from libraries
    - Sends application loggers to logs/meme_shorts.log
    """
    log_dir = log_dir or get_project_root() / LOGS_DIR_NAME
    log_dir.mkdir(parents=True, exist_ok=True)

    # Remove any default console handlers from root logger
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(logging.CRITICAL)

    for logger_name in NOISY_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.WARNING)
        logger.propagate = False

    file_handler = logging.FileHandler(log_dir / LOG_FILE_NAME, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )

    for logger_name in APP_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        logger.handlers = [file_handler]


# Initialize logging on module import
setup_logging()

# Register all commands
register_commands()


def main() -> None:
    """CLI entry point."""
    app()
