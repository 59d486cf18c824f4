"""DTOs for admin operations."""

from dataclasses import dataclass
from datetime import datetime

from authdemo.domain.enums import AdminAction, Role


@dataclass(frozen=True)
class AdminActionResult:
    """Outcome of a completed admin operation."""

    target_id: str
    action: AdminAction
    message: str


@dataclass(frozen=True)
class ManagedUser:
    """Role record joined with identity details for the admin user list.

    Identity fields are None when the identity lookup failed or the account
    no longer exists.
    """

    user_id: str
    role: Role
    updated_at: datetime
    updated_by: str | None = None
    email: str | None = None
    display_name: str | None = None
    disabled: bool | None = None
    email_verified: bool | None = None
