"""Store interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from authdemo.domain.enums import Role

if TYPE_CHECKING:
    from authdemo.domain.entities.profile import ProfileDocument
    from authdemo.domain.entities.role_record import RoleRecord


# Role store interface
class IRoleStore(Protocol):
    """Protocol for the per-user role document store."""

    async def get_role(self, user_id: str) -> Role:
        """Return the user's role; ``user`` when no record exists. Read failures raise."""

    async def get_record(self, user_id: str) -> RoleRecord | None:
        """Return the stored record, or None."""

    async def set_role(
        self, user_id: str, role: Role, updated_by: str | None = None
    ) -> RoleRecord:
        """Unconditionally overwrite the record with updatedAt = now."""

    async def delete_role(self, user_id: str) -> None:
        """Delete the record; succeeds when it is already absent."""

    async def list_all_roles(self) -> list[RoleRecord]:
        """Return every stored record."""


# Profile store interface
class IProfileStore(Protocol):
    """Protocol for the per-user profile document store."""

    async def get(self, user_id: str) -> ProfileDocument | None:
        """Return the stored profile, or None."""

    async def merge(self, user_id: str, fields: dict[str, str]) -> ProfileDocument:
        """Write only the given fields (ProfileDocument attribute names) and return the result."""
