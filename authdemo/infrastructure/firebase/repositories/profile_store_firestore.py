"""Firestore-backed profile store (implements IProfileStore)."""

from __future__ import annotations

from typing import Any

from authdemo.domain.entities.profile import DEFAULT_LANGUAGE, ProfileDocument
from authdemo.infrastructure.firebase._rest_client import FirestoreRESTClient
from authdemo.infrastructure.firebase.collections import COLLECTION_USERS, PROFILE_FIELDS


class FirestoreProfileStore:
    """Profile and settings fields in ``users/{uid}``. Writes are field-level merges."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_USERS)

    @staticmethod
    def _to_profile(data: dict[str, Any]) -> ProfileDocument:
        values = {
            attr: str(data.get(field_name) or "") for attr, field_name in PROFILE_FIELDS.items()
        }
        values["language"] = values["language"] or DEFAULT_LANGUAGE
        return ProfileDocument(**values)

    async def get(self, user_id: str) -> ProfileDocument | None:
        """Return the stored profile, or None when the user has not saved one."""
        doc = await self._coll.document(user_id).get()
        if not doc:
            return None
        return self._to_profile(doc.to_dict())

    async def merge(self, user_id: str, fields: dict[str, str]) -> ProfileDocument:
        """Write only the given ProfileDocument attributes; other stored fields are kept."""
        unknown = set(fields) - set(PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown profile fields: {sorted(unknown)}")
        await self._coll.document(user_id).set(
            {PROFILE_FIELDS[attr]: value for attr, value in fields.items()},
            merge=True,
        )
        return await self.get(user_id) or ProfileDocument(**fields)
