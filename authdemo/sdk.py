"""Client-side composition: what the web client wires up at startup.

One AuthDemoClient owns a Firebase Auth session, Firestore stores that
authenticate as the signed-in user (security rules apply), the session
mirror, and the account, profile and admin services.

    async with AuthDemoClient() as client:
        await client.account.sign_in("a@x.com", "secret1")
        state = await client.session.wait_until_ready()
"""

from __future__ import annotations

import httpx

from authdemo.application.services.account_service import AccountService
from authdemo.application.services.admin_service import AdminService
from authdemo.application.services.profile_service import ProfileService
from authdemo.application.services.session_service import SessionContext
from authdemo.core.config import Settings, get_settings
from authdemo.domain.exceptions import ServiceNotConfiguredException
from authdemo.infrastructure.external.admin_proxy_http import HttpAdminProxy
from authdemo.infrastructure.firebase._rest_client import FirestoreRESTClient
from authdemo.infrastructure.firebase.auth_client import FirebaseAuthClient
from authdemo.infrastructure.firebase.repositories import (
    FirestoreProfileStore,
    FirestoreRoleStore,
)


class AuthDemoClient:
    """Client-side services bound to one signed-in (or anonymous) user."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = settings or get_settings()
        if not settings.firebase_project_id:
            raise ServiceNotConfiguredException("Firebase project id")
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=settings.http_timeout_seconds)

        self.auth = FirebaseAuthClient.from_settings(settings, self._http)
        firestore = FirestoreRESTClient(
            settings.firebase_project_id, self.auth.get_id_token, http_client=self._http
        )
        self.role_store = FirestoreRoleStore(firestore)
        self.session = SessionContext(self.auth, self.role_store)
        self.account = AccountService(self.auth, self.role_store)
        self.profiles = ProfileService(FirestoreProfileStore(firestore))
        self.admin = AdminService(
            self.role_store,
            HttpAdminProxy(
                settings.admin_api_base_url, self.auth.get_id_token, http_client=self._http
            ),
            self.session,
        )

    async def __aenter__(self) -> "AuthDemoClient":
        await self.session.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.session.close()
        if self._owns_http:
            await self._http.aclose()
