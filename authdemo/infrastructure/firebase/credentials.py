"""Service account loading and OAuth2 access tokens (google-auth).

The key comes from FIREBASE_SERVICE_ACCOUNT_KEY (JSON string),
FIREBASE_SERVICE_ACCOUNT_PATH (file), or FIREBASE_CLIENT_EMAIL +
FIREBASE_PRIVATE_KEY + FIREBASE_PROJECT_ID. Never sent to the client.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from authdemo.core.config import Settings
from authdemo.domain.exceptions import DownstreamUnavailableException

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/cloud-platform",
    "https://www.googleapis.com/auth/datastore",
    "https://www.googleapis.com/auth/identitytoolkit",
]
_TOKEN_URI = "https://oauth2.googleapis.com/token"


def load_service_account_info(settings: Settings) -> dict[str, Any] | None:
    """Return the service account dict, or None when no privileged credentials are configured."""
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    if settings.firebase_client_email and settings.firebase_private_key:
        if not settings.firebase_project_id:
            logger.error("FIREBASE_CLIENT_EMAIL is set but FIREBASE_PROJECT_ID is missing")
            return None
        return {
            "type": "service_account",
            "project_id": settings.firebase_project_id,
            "client_email": settings.firebase_client_email.strip(),
            "private_key": settings.firebase_private_key.get_secret_value(),
            "token_uri": _TOKEN_URI,
        }
    return None


def build_credentials(info: dict[str, Any]):
    """Return google.oauth2.service_account.Credentials for Firestore and the identity admin API."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(info, scopes=SCOPES)


def _refresh_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class ServiceAccountTokenSource:
    """Async access-token provider; refreshes in a worker thread to avoid blocking."""

    def __init__(self, credentials) -> None:
        self._credentials = credentials
        self._lock = asyncio.Lock()

    async def __call__(self) -> str:
        from google.auth.exceptions import GoogleAuthError

        async with self._lock:
            try:
                return await asyncio.to_thread(_refresh_token, self._credentials)
            except GoogleAuthError as e:
                raise DownstreamUnavailableException("Google OAuth2", str(e)) from e
