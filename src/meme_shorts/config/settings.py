"""Application settings.

Sources, lowest to highest precedence:

1. Defaults in the models below
2. Environment variables (``MEME_SHORTS_`` prefix, ``__`` for nesting),
   with ``.env`` loaded first
3. ``config/settings.yaml`` or the file given with ``--config``

Example settings.yaml:

    schedule:
      peak_start_hour: 18
      gap_minutes: 30
    reddit:
      sources: ["r/memes", "r/dankmemes"]
    platforms:
      youtube:
        token_file: token.json

Example env override:

    MEME_SHORTS_SCHEDULE__GAP_MINUTES=45
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import (
    ASSETS_DIR_NAME,
    BACKGROUNDS_DIR_NAME,
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_FILE,
    LOGS_DIR_NAME,
    MUSIC_DIR_NAME,
    OUTPUT_DIR_NAME,
    REDDIT_PICK_FROM_TOP,
    TEMP_DIR_NAME,
    get_project_root,
)
from ..media.composer import VideoOutputConfig
from ..scheduling.schedule import ScheduleConfig
from ..sources.reddit import DEFAULT_MEME_SOURCES

# Load .env file
load_dotenv()


class ConfigurationError(Exception):
    """Settings invalid or a required collaborator is not configured."""

    pass


class PathsConfig(BaseModel):
    """Working directories. Relative paths resolve against ``base_dir``."""

    base_dir: Path = Field(default_factory=get_project_root)
    output_dir: Path = Path(OUTPUT_DIR_NAME)
    backgrounds_dir: Path = Path(ASSETS_DIR_NAME) / BACKGROUNDS_DIR_NAME
    music_dir: Path = Path(ASSETS_DIR_NAME) / MUSIC_DIR_NAME
    temp_dir: Path = Path(TEMP_DIR_NAME)
    logs_dir: Path = Path(LOGS_DIR_NAME)

    def resolve(self, path: Path) -> Path:
        """Absolute version of one of the paths above."""
        return path if path.is_absolute() else self.base_dir / path

    @property
    def output(self) -> Path:
        return self.resolve(self.output_dir)

    @property
    def backgrounds(self) -> Path:
        return self.resolve(self.backgrounds_dir)

    @property
    def music(self) -> Path:
        return self.resolve(self.music_dir)

    @property
    def temp(self) -> Path:
        return self.resolve(self.temp_dir)

    @property
    def logs(self) -> Path:
        return self.resolve(self.logs_dir)


class RedditConfig(BaseModel):
    """Meme discovery settings."""

    sources: list[str] = Field(default_factory=lambda: list(DEFAULT_MEME_SOURCES))
    pick_from_top: int = Field(default=REDDIT_PICK_FROM_TOP, ge=1)
    client_id: Optional[str] = None
    client_id_env: str = "REDDIT_CLIENT_ID"
    client_secret: Optional[str] = None
    client_secret_env: str = "REDDIT_CLIENT_SECRET"
    user_agent: Optional[str] = None

    def get_client_id(self) -> Optional[str]:
        """Get client id from config or environment."""
        return self.client_id or os.getenv(self.client_id_env)

    def get_client_secret(self) -> Optional[str]:
        """Get client secret from config or environment."""
        return self.client_secret or os.getenv(self.client_secret_env)


class AppSettings(BaseSettings):
    """Full application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MEME_SHORTS_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    video: VideoOutputConfig = Field(default_factory=VideoOutputConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    reddit: RedditConfig = Field(default_factory=RedditConfig)
    platform: str = "youtube"
    platforms: dict[str, dict[str, Any]] = Field(default_factory=dict)


def default_config_path() -> Path:
    return get_project_root() / CONFIG_DIR_NAME / DEFAULT_CONFIG_FILE


def load_settings(config_path: Optional[Path] = None) -> AppSettings:
    """Load settings from env and an optional YAML file.

    Args:
        config_path: Explicit YAML file. Must exist when given. When
            omitted, config/settings.yaml is used if present.

    Raises:
        ConfigurationError: Missing explicit file, bad YAML or invalid values.
    """
    data: dict[str, Any] = {}

    if config_path is not None:
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")
        data = _read_yaml(config_path)
    elif default_config_path().exists():
        data = _read_yaml(default_config_path())

    try:
        return AppSettings(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Could not read {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping at the top level")
    return data
