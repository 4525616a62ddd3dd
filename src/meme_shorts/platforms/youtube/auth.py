"""OAuth credentials for the YouTube Data API.

Publishing never prompts. Credentials are loaded from the token file
(refreshed tokens are written back) or built from a refresh token.
The one-time browser consent lives in :func:`run_consent_flow` and is
only reached from the ``authorize`` command.
"""

from __future__ import annotations

import logging
from typing import Any

from google.auth.exceptions import RefreshError, TransportError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from ...constants import PublishErrorKind
from ..base import PublishError
from .config import GOOGLE_TOKEN_URI, YOUTUBE_UPLOAD_SCOPE, YouTubeConfig

_logger = logging.getLogger("youtube_api")

SCOPES = [YOUTUBE_UPLOAD_SCOPE]


def load_credentials(config: YouTubeConfig) -> Credentials:
    """Return valid, refreshed credentials.

    Raises:
        PublishError: AUTH_FAILURE when nothing usable is configured or the
            refresh is rejected; TRANSIENT_NETWORK when the token endpoint
            cannot be reached.
    """
    from_file = config.has_token_file
    if from_file:
        try:
            creds = Credentials.from_authorized_user_file(str(config.token_file), SCOPES)
        except (OSError, ValueError) as e:
            raise PublishError(
                f"Unreadable token file {config.token_file}: {e}",
                kind=PublishErrorKind.AUTH_FAILURE,
            ) from e
    elif config.has_refresh_credentials:
        creds = Credentials(
            token=None,
            refresh_token=config.refresh_token,
            token_uri=GOOGLE_TOKEN_URI,
            client_id=config.client_id,
            client_secret=config.client_secret,
            scopes=SCOPES,
        )
    else:
        _, message = config.validate()
        raise PublishError(message, kind=PublishErrorKind.AUTH_FAILURE)

    if creds.valid:
        return creds

    if not creds.refresh_token:
        raise PublishError(
            "Access token expired and no refresh token available. Run 'meme-shorts authorize'.",
            kind=PublishErrorKind.AUTH_FAILURE,
        )

    _logger.info("Refreshing YouTube access token")
    try:
        creds.refresh(Request())
    except RefreshError as e:
        raise PublishError(
            f"Token refresh rejected: {e}",
            kind=PublishErrorKind.AUTH_FAILURE,
        ) from e
    except TransportError as e:
        raise PublishError(
            f"Token endpoint unreachable: {e}",
            kind=PublishErrorKind.TRANSIENT_NETWORK,
        ) from e

    if from_file:
        try:
            config.token_file.write_text(creds.to_json(), encoding="utf-8")
        except OSError as e:
            _logger.warning(f"Could not write refreshed token to {config.token_file}: {e}")

    return creds


def build_service(creds: Credentials) -> Any:
    """Build a YouTube Data API v3 client."""
    return build("youtube", "v3", credentials=creds, cache_discovery=False)


def run_consent_flow(config: YouTubeConfig, open_browser: bool = True) -> Credentials:
    """Interactive browser consent; stores the token file.

    Raises:
        FileNotFoundError: If client_secrets.json is missing.
    """
    from google_auth_oauthlib.flow import InstalledAppFlow

    secrets = config.client_secrets_file
    if secrets is None or not secrets.exists():
        raise FileNotFoundError(
            f"Missing {secrets}. Create an OAuth 2.0 Client ID (Desktop app) in "
            "Google Cloud Console and save its JSON there."
        )

    flow = InstalledAppFlow.from_client_secrets_file(str(secrets), SCOPES)
    creds = flow.run_local_server(port=0, open_browser=open_browser)

    config.token_file.parent.mkdir(parents=True, exist_ok=True)
    config.token_file.write_text(creds.to_json(), encoding="utf-8")
    _logger.info(f"Stored YouTube token at {config.token_file}")
    return creds
