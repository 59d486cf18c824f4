"""Thin Firestore REST API client (no firebase-admin).

Bearer tokens come from an async token provider: the service account on the
server, or a signed-in user's ID token on the client SDK (Firestore security
rules then apply). All HTTP calls use httpx.AsyncClient so they do not block
the event loop.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import httpx

from authdemo.domain.exceptions import DownstreamUnavailableException
from authdemo.infrastructure.firebase._rest_encoding import (
    decode_document,
    document_id,
    encode_document,
    encode_value,
)

_BASE = "https://firestore.googleapis.com/v1"
_SERVICE_NAME = "Firestore"
_LIST_PAGE_SIZE = 300

TokenProvider = Callable[[], Awaitable[str]]


class FirestoreError(Exception):
    """Raised for a 4xx answer other than 404 (e.g. 403 from security rules)."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(f"Firestore request failed ({status_code}): {message}")

    @property
    def permission_denied(self) -> bool:
        return self.status_code in (401, 403)


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict):
        return (body.get("error") or {}).get("message") or resp.reason_phrase
    return resp.reason_phrase


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    params: list[tuple[str, str]] | None = None,
    access_token: str | None = None,
) -> dict | list | None:
    """Perform an async HTTP request to the Firestore REST API. 404 returns None."""
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    try:
        resp = await client.request(method, url, headers=headers, json=body, params=params)
    except httpx.TransportError as e:
        raise DownstreamUnavailableException(_SERVICE_NAME, str(e) or type(e).__name__) from e
    if resp.status_code == 404:
        return None
    if resp.status_code >= 500:
        raise DownstreamUnavailableException(_SERVICE_NAME, f"HTTP {resp.status_code}")
    if resp.status_code >= 400:
        raise FirestoreError(resp.status_code, _error_message(resp))
    if method == "DELETE":
        return {}
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


class DocumentReference:
    """Reference to a single document; mirrors the firestore client API."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return self._path.rsplit("/", 1)[-1]

    async def set(self, data: dict[str, Any], *, merge: bool = False) -> None:
        """Create or overwrite the document.

        With merge=True only the given top-level fields are written (PATCH with
        an update mask); other fields already in the document are kept.
        """
        params = [("updateMask.fieldPaths", k) for k in data] if merge else None
        await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            method="PATCH",
            body=encode_document(data),
            params=params,
            access_token=await self._client.get_token(),
        )

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            access_token=await self._client.get_token(),
        )
        if out is None:
            return None
        return DocumentSnapshot(self.id, decode_document(out))

    async def delete(self) -> None:
        """Delete the document. Idempotent if the document is already missing."""
        await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            method="DELETE",
            access_token=await self._client.get_token(),
        )


class _Query:
    """Single-filter query on a collection, run via runQuery."""

    def __init__(
        self,
        client: "FirestoreRESTClient",
        parent: str,
        collection_id: str,
        field: str,
        value: Any,
    ):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._field = field
        self._value = value
        self._limit: int | None = None

    def limit(self, n: int) -> "_Query":
        self._limit = n
        return self

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        structured: dict[str, Any] = {
            "from": [{"collectionId": self._collection_id}],
            "where": {
                "fieldFilter": {
                    "field": {"fieldPath": self._field},
                    "op": "EQUAL",
                    "value": encode_value(self._value),
                }
            },
        }
        if self._limit:
            structured["limit"] = self._limit
        resp = await _request_async(
            self._client._http,
            f"{_BASE}/{self._parent}:runQuery",
            method="POST",
            body={"structuredQuery": structured},
            access_token=await self._client.get_token(),
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            doc = item.get("document")
            if doc:
                yield DocumentSnapshot(document_id(doc), decode_document(doc))


class CollectionReference:
    """Reference to a top-level collection."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path.rstrip("/")

    def document(self, doc_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{doc_id}")

    def where_equal(self, field: str, value: Any) -> _Query:
        """Query documents whose field equals value. Use .limit() then .stream()."""
        parent, collection_id = self._path.rsplit("/", 1)
        return _Query(self._client, parent, collection_id, field, value)

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """List every document in the collection, following nextPageToken."""
        page_token: str | None = None
        while True:
            params = [("pageSize", str(_LIST_PAGE_SIZE))]
            if page_token:
                params.append(("pageToken", page_token))
            out = await _request_async(
                self._client._http,
                f"{_BASE}/{self._path}",
                params=params,
                access_token=await self._client.get_token(),
            )
            if not out:
                return
            for doc in out.get("documents", []):
                yield DocumentSnapshot(document_id(doc), decode_document(doc))
            page_token = out.get("nextPageToken")
            if not page_token:
                return


class FirestoreRESTClient:
    """Lightweight Firestore client using the REST API (no firebase-admin)."""

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
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    @property
    def project_id(self) -> str:
        return self._project_id

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        return await self._token_provider()

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")
