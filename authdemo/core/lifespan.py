"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: logging, the shared outbound
HTTP client and the Firebase service-account clients.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from authdemo.core.config import get_settings
from authdemo.core.logging import setup_logging
from authdemo.infrastructure.firebase import init_firebase

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit close the Firebase clients and the HTTP client."""
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    # Shared HTTP client for Identity Toolkit and Firestore calls (connection reuse).
    app.state.http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    app.state.firebase = init_firebase(settings, app.state.http_client)
    if app.state.firebase is None:
        logger.warning("Privileged endpoints disabled: no Firebase service account configured")

    yield

    # ---- Shutdown ----
    if getattr(app.state, "firebase", None) is not None:
        await app.state.firebase.aclose()
        app.state.firebase = None
    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("Outbound HTTP client closed")
