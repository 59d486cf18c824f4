"""RoleRecord: per-user role document."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from authdemo.domain.enums import Role


@dataclass(frozen=True)
class RoleRecord:
    """Role for a user id, with who set it and when.

    ``updated_by`` is None for records created at sign-up.
    """

    user_id: str
    role: Role
    updated_at: datetime
    updated_by: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
