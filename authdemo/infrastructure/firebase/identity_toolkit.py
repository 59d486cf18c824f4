"""Firebase Auth over the Identity Toolkit REST API (v1).

IdentityToolkitClient covers the end-user operations and authenticates with
the project's web API key. IdentityAdminClient covers the privileged ones
(lookup, delete, disable) and authenticates with a service-account OAuth2
token; it also verifies Firebase ID tokens with google-auth.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any
from urllib.parse import urlencode

import httpx

from authdemo.application.error_messages import (
    SESSION_EXPIRED_MESSAGE,
    get_error_message,
    split_error_code,
)
from authdemo.domain.entities.identity import AuthIdentity
from authdemo.domain.enums import ProviderId
from authdemo.domain.exceptions import (
    AuthenticationException,
    DownstreamUnavailableException,
    IdentityServiceException,
    ResourceNotFoundException,
)
from authdemo.infrastructure.firebase._rest_client import TokenProvider
from authdemo.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

_BASE = "https://identitytoolkit.googleapis.com/v1"
_SECURE_TOKEN_URL = "https://securetoken.googleapis.com/v1/token"
_SERVICE_NAME = "Identity service"
# Pseudo-providers that appear in ID token identities but are not sign-in providers.
_NON_PROVIDER_IDENTITIES = frozenset({"email", "phone"})


@dataclass(frozen=True)
class AuthTokens:
    """Tokens returned by sign-in, sign-up and refresh."""

    user_id: str
    id_token: str
    refresh_token: str
    expires_at: datetime

    def expired(self, now: datetime | None = None, leeway_seconds: int = 60) -> bool:
        return (now or utc_now()) >= self.expires_at - timedelta(seconds=leeway_seconds)


def _tokens_from(body: dict[str, Any], *, snake_case: bool = False) -> AuthTokens:
    """Build AuthTokens from an accounts:* response (camelCase) or a securetoken response (snake_case)."""
    if snake_case:
        user_id, id_token = body["user_id"], body["id_token"]
        refresh, expires_in = body["refresh_token"], body.get("expires_in", "3600")
    else:
        user_id, id_token = body["localId"], body["idToken"]
        refresh, expires_in = body["refreshToken"], body.get("expiresIn", "3600")
    return AuthTokens(
        user_id=user_id,
        id_token=id_token,
        refresh_token=refresh,
        expires_at=utc_now() + timedelta(seconds=int(expires_in)),
    )


def identity_from_account(user: dict[str, Any]) -> AuthIdentity:
    """Build AuthIdentity from an accounts:lookup user entry (UserInfo)."""
    providers = {
        p.get("providerId") for p in user.get("providerUserInfo") or [] if p.get("providerId")
    }
    if user.get("passwordHash") and ProviderId.PASSWORD.value not in providers:
        providers.add(ProviderId.PASSWORD.value)
    return AuthIdentity(
        id=user["localId"],
        email=user.get("email"),
        email_verified=bool(user.get("emailVerified", False)),
        display_name=user.get("displayName"),
        providers=frozenset(providers),
        disabled=bool(user.get("disabled", False)),
    )


def identity_from_claims(claims: dict[str, Any]) -> AuthIdentity:
    """Build AuthIdentity from verified ID token claims.

    Tokens are only issued to enabled accounts, so ``disabled`` is False.
    """
    firebase = claims.get("firebase") or {}
    providers = {
        p for p in (firebase.get("identities") or {}) if p not in _NON_PROVIDER_IDENTITIES
    }
    sign_in_provider = firebase.get("sign_in_provider")
    if sign_in_provider and sign_in_provider not in ("custom", "anonymous"):
        providers.add(sign_in_provider)
    return AuthIdentity(
        id=claims.get("user_id") or claims["sub"],
        email=claims.get("email"),
        email_verified=bool(claims.get("email_verified", False)),
        display_name=claims.get("name"),
        providers=frozenset(providers),
    )


def _raise_for_error(resp: httpx.Response) -> None:
    if resp.status_code >= 500:
        raise DownstreamUnavailableException(_SERVICE_NAME, f"HTTP {resp.status_code}")
    if resp.status_code < 400:
        return
    raw = ""
    try:
        body = resp.json()
        if isinstance(body, dict):
            err = body.get("error")
            # securetoken answers {"error": {"message": ...}}; some proxies answer {"error": "..."}
            raw = err.get("message", "") if isinstance(err, dict) else str(err or "")
    except ValueError:
        raw = resp.text
    code, detail = split_error_code(raw or f"HTTP_{resp.status_code}")
    raise IdentityServiceException(code, get_error_message(code, detail))


async def _post(
    http: httpx.AsyncClient,
    url: str,
    *,
    json: dict[str, Any] | None = None,
    content: str | None = None,
    params: dict[str, str] | None = None,
    access_token: str | None = None,
) -> dict[str, Any]:
    headers: dict[str, str] = {}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if content is not None:
        headers["Content-Type"] = "application/x-www-form-urlencoded"
    try:
        resp = await http.post(url, json=json, content=content, params=params, headers=headers)
    except httpx.TransportError as e:
        raise DownstreamUnavailableException(_SERVICE_NAME, str(e) or type(e).__name__) from e
    _raise_for_error(resp)
    return resp.json() if resp.content else {}


class IdentityToolkitClient:
    """End-user Firebase Auth operations keyed by the web API key."""

    def __init__(
        self,
        api_key: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._params = {"key": api_key}
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def _accounts(self, op: str, body: dict[str, Any]) -> dict[str, Any]:
        return await _post(self._http, f"{_BASE}/accounts:{op}", json=body, params=self._params)

    async def sign_up(self, email: str, password: str) -> AuthTokens:
        body = await self._accounts(
            "signUp", {"email": email, "password": password, "returnSecureToken": True}
        )
        return _tokens_from(body)

    async def sign_in_with_password(self, email: str, password: str) -> AuthTokens:
        body = await self._accounts(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return _tokens_from(body)

    async def sign_in_with_idp(
        self, provider_id: str, credential: str, request_uri: str = "http://localhost"
    ) -> tuple[AuthTokens, dict[str, Any]]:
        """Exchange a Google ID token or Facebook access token for a Firebase session.

        Returns the tokens and the raw response (displayName, email, isNewUser, ...).
        """
        kind = "id_token" if provider_id == ProviderId.GOOGLE.value else "access_token"
        body = await self._accounts(
            "signInWithIdp",
            {
                "postBody": urlencode({kind: credential, "providerId": provider_id}),
                "requestUri": request_uri,
                "returnIdpCredential": True,
                "returnSecureToken": True,
            },
        )
        return _tokens_from(body), body

    async def send_verification_email(self, id_token: str) -> None:
        await self._accounts("sendOobCode", {"requestType": "VERIFY_EMAIL", "idToken": id_token})

    async def send_password_reset(self, email: str) -> None:
        await self._accounts("sendOobCode", {"requestType": "PASSWORD_RESET", "email": email})

    async def update_account(
        self,
        id_token: str,
        *,
        password: str | None = None,
        display_name: str | None = None,
    ) -> AuthTokens | None:
        """Change password and/or display name. A password change issues new tokens."""
        body: dict[str, Any] = {"idToken": id_token, "returnSecureToken": password is not None}
        if password is not None:
            body["password"] = password
        if display_name is not None:
            body["displayName"] = display_name
        out = await self._accounts("update", body)
        return _tokens_from(out) if password is not None and "idToken" in out else None

    async def delete_account(self, id_token: str) -> None:
        await self._accounts("delete", {"idToken": id_token})

    async def lookup(self, id_token: str) -> AuthIdentity:
        out = await self._accounts("lookup", {"idToken": id_token})
        users = out.get("users") or []
        if not users:
            raise AuthenticationException(SESSION_EXPIRED_MESSAGE)
        return identity_from_account(users[0])

    async def refresh(self, refresh_token: str) -> AuthTokens:
        out = await _post(
            self._http,
            _SECURE_TOKEN_URL,
            content=urlencode({"grant_type": "refresh_token", "refresh_token": refresh_token}),
            params=self._params,
        )
        return _tokens_from(out, snake_case=True)


def _verify_firebase_token(token: str, project_id: str, request) -> dict[str, Any]:
    from google.oauth2 import id_token

    claims = id_token.verify_firebase_token(token, request, audience=project_id)
    if claims.get("iss") != f"https://securetoken.google.com/{project_id}":
        raise ValueError("Token has an unexpected issuer")
    if not claims.get("sub"):
        raise ValueError("Token has no subject")
    return claims


class IdentityAdminClient:
    """Privileged Firebase Auth operations using a service-account token."""

    def __init__(
        self,
        project_id: str,
        token_provider: TokenProvider,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._project_id = project_id
        self._token_provider = token_provider
        self._base = f"{_BASE}/projects/{project_id}"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None
        self._google_request = None

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def _accounts(self, op: str, body: dict[str, Any]) -> dict[str, Any]:
        return await _post(
            self._http,
            f"{self._base}/accounts:{op}",
            json=body,
            access_token=await self._token_provider(),
        )

    async def get_user(self, user_id: str) -> AuthIdentity | None:
        out = await self._accounts("lookup", {"localId": [user_id]})
        users = out.get("users") or []
        return identity_from_account(users[0]) if users else None

    async def delete_user(self, user_id: str) -> bool:
        """Delete the account. Returns False when it was already absent."""
        try:
            await self._accounts("delete", {"localId": user_id})
        except IdentityServiceException as e:
            if e.code == "USER_NOT_FOUND":
                logger.info("Delete requested for absent user %s; treating as done", user_id)
                return False
            raise
        return True

    async def update_user(self, user_id: str, *, disabled: bool) -> AuthIdentity:
        """Set the account's disabled flag. Setting it to its current value succeeds."""
        try:
            await self._accounts("update", {"localId": user_id, "disableUser": disabled})
        except IdentityServiceException as e:
            if e.code == "USER_NOT_FOUND":
                raise ResourceNotFoundException("user", user_id) from None
            raise
        identity = await self.get_user(user_id)
        if identity is None:
            raise ResourceNotFoundException("user", user_id)
        return identity

    async def verify_id_token(self, token: str) -> AuthIdentity:
        """Verify a Firebase ID token (signature, audience, issuer, expiry) and return the caller."""
        from google.auth import exceptions as google_exceptions
        from google.auth.transport.requests import Request

        if self._google_request is None:
            self._google_request = Request()
        try:
            claims = await asyncio.to_thread(
                _verify_firebase_token, token, self._project_id, self._google_request
            )
        except google_exceptions.TransportError as e:
            raise DownstreamUnavailableException("Google token certificates", str(e)) from e
        except ValueError as e:
            if "expired" in str(e).lower():
                raise AuthenticationException(SESSION_EXPIRED_MESSAGE) from e
            raise AuthenticationException("Invalid authentication token") from e
        return identity_from_claims(claims)
