"""Server-side privileged user management behind /api/admin.

The caller's admin role is checked by the API dependency before any of
these run; each method performs exactly one identity-service mutation.
"""

from __future__ import annotations

import asyncio
import logging

from authdemo.application.dtos.admin import ManagedUser
from authdemo.application.interfaces.repositories import IRoleStore
from authdemo.application.interfaces.services import IIdentityAdmin
from authdemo.domain.entities.identity import AuthIdentity
from authdemo.domain.entities.role_record import RoleRecord
from authdemo.domain.exceptions import AuthDemoException

logger = logging.getLogger(__name__)

# Concurrent identity lookups when joining the user list.
_LOOKUP_CONCURRENCY = 10


class UserDirectoryService:
    """Privileged identity operations plus the role/identity join for the admin table."""

    def __init__(self, identity_admin: IIdentityAdmin, role_store: IRoleStore) -> None:
        self._identity_admin = identity_admin
        self._role_store = role_store

    async def delete_user(self, user_id: str, actor_id: str) -> str:
        """Delete the identity. An already-absent identity is reported as success."""
        deleted = await self._identity_admin.delete_user(user_id)
        logger.info("Admin %s deleted identity %s (existed=%s)", actor_id, user_id, deleted)
        return "User deleted successfully" if deleted else "User already deleted"

    async def set_disabled(self, user_id: str, disabled: bool, actor_id: str) -> str:
        """Disable or enable the identity. Repeating either succeeds."""
        await self._identity_admin.update_user(user_id, disabled=disabled)
        logger.info("Admin %s set disabled=%s on %s", actor_id, disabled, user_id)
        return "User disabled successfully" if disabled else "User enabled successfully"

    async def list_users(self) -> list[ManagedUser]:
        """Every role record joined with identity details; failed lookups leave them empty."""
        records = await self._role_store.list_all_roles()
        semaphore = asyncio.Semaphore(_LOOKUP_CONCURRENCY)

        async def lookup(record: RoleRecord) -> AuthIdentity | None:
            async with semaphore:
                try:
                    return await self._identity_admin.get_user(record.user_id)
                except AuthDemoException as e:
                    logger.warning("Identity lookup failed for %s: %s", record.user_id, e.message)
                    return None

        identities = await asyncio.gather(*(lookup(r) for r in records))
        return [
            ManagedUser(
                user_id=record.user_id,
                role=record.role,
                updated_at=record.updated_at,
                updated_by=record.updated_by,
                email=identity.email if identity else None,
                display_name=identity.display_name if identity else None,
                disabled=identity.disabled if identity else None,
                email_verified=identity.email_verified if identity else None,
            )
            for record, identity in zip(records, identities)
        ]
