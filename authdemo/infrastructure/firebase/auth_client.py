"""Client-side Firebase Auth session (implements ICredentialService).

Holds the signed-in user's tokens in memory and notifies auth-state
listeners on every sign-in and sign-out, the way the Firebase web SDK
does. Nothing is persisted.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import TypeVar

import httpx

from authdemo.application.error_messages import SESSION_CODES, SESSION_EXPIRED_MESSAGE
from authdemo.application.interfaces.services import AuthStateListener, Unsubscribe
from authdemo.core.config import Settings
from authdemo.domain.entities.identity import AuthIdentity
from authdemo.domain.enums import ProviderId
from authdemo.domain.exceptions import (
    AuthenticationException,
    IdentityServiceException,
    ServiceNotConfiguredException,
    ValidationException,
)
from authdemo.infrastructure.firebase.identity_toolkit import AuthTokens, IdentityToolkitClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SOCIAL_PROVIDERS = frozenset({ProviderId.GOOGLE.value, ProviderId.FACEBOOK.value})


class FirebaseAuthClient:
    """In-memory Firebase Auth session over the Identity Toolkit REST API."""

    def __init__(self, toolkit: IdentityToolkitClient) -> None:
        self._toolkit = toolkit
        self._tokens: AuthTokens | None = None
        self._user: AuthIdentity | None = None
        self._listeners: list[AuthStateListener] = []

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.AsyncClient | None = None
    ) -> "FirebaseAuthClient":
        if not settings.firebase_api_key:
            raise ServiceNotConfiguredException("Firebase web API key")
        return cls(
            IdentityToolkitClient(
                settings.firebase_api_key.get_secret_value(),
                http_client=http_client,
                timeout=settings.http_timeout_seconds,
            )
        )

    async def aclose(self) -> None:
        await self._toolkit.aclose()

    @property
    def current_user(self) -> AuthIdentity | None:
        return self._user

    # ---- auth state ----

    def on_auth_state_change(self, listener: AuthStateListener) -> Unsubscribe:
        """Register listener; it is called with the current user right away."""
        self._listeners.append(listener)
        listener(self._user)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._user)

    async def _start_session(
        self, tokens: AuthTokens, provider_display_name: str | None = None
    ) -> AuthIdentity:
        identity = await self._toolkit.lookup(tokens.id_token)
        if identity.display_name is None and provider_display_name:
            identity = replace(identity, display_name=provider_display_name)
        self._tokens = tokens
        self._user = identity
        logger.info("Signed in user %s", identity.id)
        self._notify()
        return identity

    def _end_session(self) -> None:
        had_user = self._user is not None
        self._tokens = None
        self._user = None
        if had_user:
            self._notify()

    async def _with_token(self, call: Callable[[str], Awaitable[T]]) -> T:
        """Run call with a valid ID token; an expired session signs the user out."""
        token = await self.get_id_token()
        try:
            return await call(token)
        except IdentityServiceException as e:
            if e.code in SESSION_CODES:
                self._end_session()
                raise AuthenticationException(SESSION_EXPIRED_MESSAGE) from e
            raise

    async def get_id_token(self, force_refresh: bool = False) -> str:
        if self._tokens is None:
            raise AuthenticationException()
        if force_refresh or self._tokens.expired():
            try:
                self._tokens = await self._toolkit.refresh(self._tokens.refresh_token)
            except IdentityServiceException as e:
                if e.code in SESSION_CODES or e.code == "USER_DISABLED":
                    self._end_session()
                    raise AuthenticationException(SESSION_EXPIRED_MESSAGE) from e
                raise
        return self._tokens.id_token

    # ---- sign-in / sign-out ----

    async def sign_up(self, email: str, password: str) -> AuthIdentity:
        return await self._start_session(await self._toolkit.sign_up(email, password))

    async def sign_in(self, email: str, password: str) -> AuthIdentity:
        return await self._start_session(
            await self._toolkit.sign_in_with_password(email, password)
        )

    async def sign_in_with_provider(self, provider_id: str, credential: str) -> AuthIdentity:
        if provider_id not in _SOCIAL_PROVIDERS:
            raise ValidationException(
                f"Unsupported sign-in provider: {provider_id}", field="provider"
            )
        tokens, body = await self._toolkit.sign_in_with_idp(provider_id, credential)
        return await self._start_session(tokens, body.get("displayName"))

    async def sign_out(self) -> None:
        if self._user is not None:
            logger.info("Signed out user %s", self._user.id)
        self._end_session()

    # ---- account management ----

    async def send_verification_email(self) -> None:
        await self._with_token(self._toolkit.send_verification_email)

    async def reset_password(self, email: str) -> None:
        await self._toolkit.send_password_reset(email)

    async def update_password(self, current_password: str, new_password: str) -> None:
        user = self._user
        if user is None:
            raise AuthenticationException()
        if not user.email:
            raise ValidationException("This account has no email password to change")
        reauth = await self._toolkit.sign_in_with_password(user.email, current_password)
        if reauth.user_id != user.id:
            raise AuthenticationException("Re-authentication returned a different user")
        self._tokens = reauth
        tokens = await self._with_token(
            lambda token: self._toolkit.update_account(token, password=new_password)
        )
        if tokens is not None:
            self._tokens = tokens

    async def update_profile(self, display_name: str) -> AuthIdentity:
        await self._with_token(
            lambda token: self._toolkit.update_account(token, display_name=display_name)
        )
        if self._user is None:
            raise AuthenticationException()
        self._user = replace(self._user, display_name=display_name)
        self._notify()
        return self._user

    async def delete_user(self) -> None:
        await self._with_token(self._toolkit.delete_account)
        self._end_session()
