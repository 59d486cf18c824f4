"""HTTP client for the privileged admin endpoints (implements IAdminProxy).

Sends the signed-in admin's ID token as a bearer token. Error responses
are mapped back to the domain exceptions the server raised.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from authdemo.domain.exceptions import (
    AuthDemoException,
    AuthenticationException,
    AuthorizationException,
    DownstreamUnavailableException,
    ResourceNotFoundException,
    ServiceNotConfiguredException,
    ValidationException,
)
from authdemo.infrastructure.firebase._rest_client import TokenProvider

logger = logging.getLogger(__name__)

_SERVICE_NAME = "Admin API"
_PREFIX = "/api/admin"


def _json_body(resp: httpx.Response) -> dict[str, Any]:
    try:
        body = resp.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _raise_for_status(resp: httpx.Response, user_id: str) -> None:
    if resp.status_code < 400:
        return
    body = _json_body(resp)
    message = body.get("message") or resp.reason_phrase
    status = resp.status_code
    if status == 400:
        raise ValidationException(message, field="userId")
    if status == 401:
        raise AuthenticationException(message)
    if status == 403:
        raise AuthorizationException(message, required_role="admin")
    if status == 404:
        raise ResourceNotFoundException("user", user_id)
    if status == 503 and (body.get("details") or {}).get("component"):
        raise ServiceNotConfiguredException(body["details"]["component"])
    if status >= 500:
        raise DownstreamUnavailableException(_SERVICE_NAME, message)
    raise AuthDemoException(message, body.get("error") or f"HTTP_{status}")


class HttpAdminProxy:
    """Calls DELETE /deleteUser, POST /disableUser and POST /enableUser."""

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token_provider = token_provider
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def _call(self, method: str, endpoint: str, user_id: str) -> str:
        token = await self._token_provider()
        try:
            resp = await self._http.request(
                method,
                f"{self._base_url}{_PREFIX}/{endpoint}",
                params={"userId": user_id},
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.TransportError as e:
            raise DownstreamUnavailableException(_SERVICE_NAME, str(e) or type(e).__name__) from e
        _raise_for_status(resp, user_id)
        message = _json_body(resp).get("message", "")
        logger.debug("%s %s for %s: %s", method, endpoint, user_id, message)
        return message

    async def delete_user(self, user_id: str) -> str:
        return await self._call("DELETE", "deleteUser", user_id)

    async def disable_user(self, user_id: str) -> str:
        return await self._call("POST", "disableUser", user_id)

    async def enable_user(self, user_id: str) -> str:
        return await self._call("POST", "enableUser", user_id)
