"""Admin API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from authdemo.domain.enums import Role


class AdminActionResponse(BaseModel):
    """Response for deleteUser / disableUser / enableUser."""

    success: bool = True
    message: str = Field(..., description="What was done (e.g. 'User already deleted')")


class ManagedUserResponse(BaseModel):
    """Row of GET /api/admin/users. Identity fields are null when the lookup failed."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    role: Role
    updated_at: datetime
    updated_by: str | None = None
    email: str | None = None
    display_name: str | None = None
    disabled: bool | None = None
    email_verified: bool | None = None
