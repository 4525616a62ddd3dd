"""YouTube platform configuration."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from ...constants import (
    YOUTUBE_CATEGORY_ENTERTAINMENT,
    YOUTUBE_CLIENT_SECRETS_FILE,
    YOUTUBE_TOKEN_FILE,
)
from ..base import PlatformConfig

YOUTUBE_UPLOAD_SCOPE = "https://www.googleapis.com/auth/youtube.upload"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


@dataclass
class YouTubeConfig(PlatformConfig):
    """YouTube-specific configuration.

    Credentials come from one of:

    1. ``token.json`` written by ``meme-shorts authorize`` (preferred)
    2. client id/secret plus a refresh token, from settings or env vars

    Settings format (config/settings.yaml):
        platforms:
          youtube:
            client_id: "ENV:YOUTUBE_CLIENT_ID"
            client_secret: "ENV:YOUTUBE_CLIENT_SECRET"
            refresh_token: "ENV:YOUTUBE_REFRESH_TOKEN"
            token_file: token.json
            client_secrets_file: client_secrets.json

    YouTube API Setup:
    1. Create a project at https://console.cloud.google.com/
    2. Enable "YouTube Data API v3"
    3. Create an OAuth 2.0 Client ID (Desktop app)
    4. Save the JSON as client_secrets.json and run ``meme-shorts authorize``
    """

    platform: str = "youtube"

    client_id: str = ""
    client_secret: str = ""
    refresh_token: str = ""

    token_file: Optional[Path] = None
    client_secrets_file: Optional[Path] = None

    category_id: str = YOUTUBE_CATEGORY_ENTERTAINMENT
    made_for_kids: bool = False

    @classmethod
    def from_settings(
        cls,
        base_dir: Path,
        platform_data: dict[str, Any],
    ) -> "YouTubeConfig":
        """Load configuration, falling back to environment variables."""
        resolved = cls.resolve_dict(platform_data)

        token_file = Path(resolved.get("token_file") or YOUTUBE_TOKEN_FILE)
        secrets_file = Path(resolved.get("client_secrets_file") or YOUTUBE_CLIENT_SECRETS_FILE)
        if not token_file.is_absolute():
            token_file = base_dir / token_file
        if not secrets_file.is_absolute():
            secrets_file = base_dir / secrets_file

        client_id = resolved.get("client_id") or os.getenv("YOUTUBE_CLIENT_ID", "")
        client_secret = resolved.get("client_secret") or os.getenv("YOUTUBE_CLIENT_SECRET", "")
        if not (client_id and client_secret):
            file_id, file_secret = read_client_secrets(secrets_file)
            client_id = client_id or file_id
            client_secret = client_secret or file_secret

        return cls(
            enabled=resolved.get("enabled", True),
            client_id=client_id,
            client_secret=client_secret,
            refresh_token=resolved.get("refresh_token") or os.getenv("YOUTUBE_REFRESH_TOKEN", ""),
            token_file=token_file,
            client_secrets_file=secrets_file,
            category_id=str(resolved.get("category_id", YOUTUBE_CATEGORY_ENTERTAINMENT)),
            made_for_kids=bool(resolved.get("made_for_kids", False)),
        )

    @property
    def has_token_file(self) -> bool:
        return self.token_file is not None and self.token_file.exists()

    @property
    def has_refresh_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret and self.refresh_token)

    def validate(self) -> tuple[bool, str]:
        """Validate that upload credentials are present.

        Returns:
            Tuple of (is_valid, error_message).
        """
        if not self.enabled:
            return False, "YouTube publishing is disabled in settings"

        if self.has_token_file or self.has_refresh_credentials:
            return True, "OK"

        missing = []
        if not self.client_id:
            missing.append("client_id (or YOUTUBE_CLIENT_ID / client_secrets.json)")
        if not self.client_secret:
            missing.append("client_secret (or YOUTUBE_CLIENT_SECRET / client_secrets.json)")
        if not self.refresh_token:
            missing.append("refresh_token (or YOUTUBE_REFRESH_TOKEN, or run 'meme-shorts authorize')")

        return False, f"Missing YouTube credentials: {', '.join(missing)}"


def read_client_secrets(path: Optional[Path]) -> tuple[str, str]:
    """Read client id and secret from a Google client_secrets.json.

    Handles both "installed" (Desktop) and "web" credential types.
    Returns empty strings when the file is missing or malformed.
    """
    if path is None or not path.exists():
        return "", ""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return "", ""

    section = data.get("installed") or data.get("web") or {}
    return section.get("client_id", ""), section.get("client_secret", "")
