"""Firebase clients for the server (REST-based, no firebase-admin).

Initialized at app startup from the service account configured via
FIREBASE_SERVICE_ACCOUNT_KEY, FIREBASE_SERVICE_ACCOUNT_PATH or
FIREBASE_CLIENT_EMAIL + FIREBASE_PRIVATE_KEY. Without one the app still
starts; the privileged endpoints then answer 503.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from authdemo.core.config import Settings
from authdemo.infrastructure.firebase._rest_client import FirestoreRESTClient
from authdemo.infrastructure.firebase.credentials import (
    ServiceAccountTokenSource,
    build_credentials,
    load_service_account_info,
)
from authdemo.infrastructure.firebase.identity_toolkit import IdentityAdminClient

logger = logging.getLogger(__name__)


@dataclass
class FirebaseServices:
    """Service-account clients shared by all requests."""

    project_id: str
    firestore: FirestoreRESTClient
    identity_admin: IdentityAdminClient

    async def aclose(self) -> None:
        await self.firestore.aclose()
        await self.identity_admin.aclose()


def init_firebase(
    settings: Settings, http_client: httpx.AsyncClient | None = None
) -> FirebaseServices | None:
    """Build the Firestore and identity admin clients.

    Safe to call when no credentials are set (returns None). On invalid or
    malformed credentials, logs the exception and returns None so the app
    can start without privileged access.
    """
    try:
        info = load_service_account_info(settings)
        if not info:
            logger.info("No Firebase service account configured; admin endpoints disabled")
            return None
        project_id = settings.firebase_project_id or info.get("project_id")
        if not project_id:
            logger.error("Firebase service account JSON missing 'project_id'")
            return None
        tokens = ServiceAccountTokenSource(build_credentials(info))
        timeout = settings.http_timeout_seconds
        services = FirebaseServices(
            project_id=project_id,
            firestore=FirestoreRESTClient(
                project_id, tokens, http_client=http_client, timeout=timeout
            ),
            identity_admin=IdentityAdminClient(
                project_id, tokens, http_client=http_client, timeout=timeout
            ),
        )
    except Exception:
        logger.exception("Firebase initialization failed")
        return None
    logger.info("Firebase initialized for project %s", project_id)
    return services
