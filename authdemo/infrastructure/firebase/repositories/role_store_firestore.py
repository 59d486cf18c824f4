"""Firestore-backed role store (implements IRoleStore).

One document per user in ``userRoles``, keyed by user id.
"""

from __future__ import annotations

import logging
from typing import Any

from authdemo.domain.entities.role_record import RoleRecord
from authdemo.domain.enums import Role
from authdemo.infrastructure.firebase._rest_client import FirestoreRESTClient
from authdemo.infrastructure.firebase.collections import (
    COLLECTION_USER_ROLES,
    FIELD_ROLE,
    FIELD_UPDATED_AT,
    FIELD_UPDATED_BY,
)
from authdemo.shared.utils.datetime import parse_timestamp, utc_now

logger = logging.getLogger(__name__)


class FirestoreRoleStore:
    """Role records in Firestore. A missing record reads as ``user``."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_USER_ROLES)

    def _to_record(self, doc_id: str, data: dict[str, Any]) -> RoleRecord:
        raw_role = data.get(FIELD_ROLE)
        role = Role.parse(raw_role)
        if role is None:
            logger.warning("Unknown role %r on userRoles/%s; reading as user", raw_role, doc_id)
            role = Role.USER
        updated_at = parse_timestamp(data.get(FIELD_UPDATED_AT))
        if updated_at is None:
            logger.warning("Missing or invalid updatedAt on userRoles/%s", doc_id)
            updated_at = utc_now()
        return RoleRecord(
            user_id=doc_id,
            role=role,
            updated_at=updated_at,
            updated_by=data.get(FIELD_UPDATED_BY),
        )

    async def get_record(self, user_id: str) -> RoleRecord | None:
        """Return the stored record, or None when the user has none."""
        doc = await self._coll.document(user_id).get()
        if not doc:
            return None
        return self._to_record(doc.id, doc.to_dict())

    async def get_role(self, user_id: str) -> Role:
        """Return the user's role; ``user`` when no record exists. Read failures propagate."""
        record = await self.get_record(user_id)
        return record.role if record else Role.USER

    async def set_role(
        self, user_id: str, role: Role, updated_by: str | None = None
    ) -> RoleRecord:
        """Overwrite the record (last write wins) and return what was written."""
        now = utc_now()
        await self._coll.document(user_id).set({
            FIELD_ROLE: role.value,
            FIELD_UPDATED_AT: now,
            FIELD_UPDATED_BY: updated_by,
        })
        return RoleRecord(user_id=user_id, role=role, updated_at=now, updated_by=updated_by)

    async def delete_role(self, user_id: str) -> None:
        """Delete the record. Deleting a missing record succeeds."""
        await self._coll.document(user_id).delete()

    async def list_all_roles(self) -> list[RoleRecord]:
        """Return every role record (follows Firestore pagination)."""
        return [self._to_record(doc.id, doc.to_dict()) async for doc in self._coll.stream()]

    async def list_by_role(self, role: Role, limit: int | None = None) -> list[RoleRecord]:
        """Return records holding the given role."""
        q = self._coll.where_equal(FIELD_ROLE, role.value)
        if limit:
            q = q.limit(limit)
        return [self._to_record(doc.id, doc.to_dict()) async for doc in q.stream()]
