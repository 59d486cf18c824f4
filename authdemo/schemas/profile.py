"""Profile, settings and current-user API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from authdemo.domain.enums import Role


class MeResponse(BaseModel):
    """Response for GET /api/me."""

    id: str
    email: str | None = None
    email_verified: bool
    display_name: str | None = None
    providers: list[str]
    role: Role
    verification_satisfied: bool = Field(
        ..., description="Email verified, or signed in with a provider exempt from verification"
    )


class ProfileResponse(BaseModel):
    """Profile document (profile page and settings page fields)."""

    model_config = ConfigDict(from_attributes=True)

    bio: str
    interests: str
    looking_for: str
    gender: str
    display_name: str
    birthdate: str
    location: str
    language: str
    photo_folder: str
    primary_photo: str


class ProfileUpdate(BaseModel):
    """Request body for PUT /api/me/profile (profile page fields only)."""

    bio: str = Field(default="", max_length=2000)
    interests: str = Field(default="", max_length=2000)
    looking_for: str = Field(default="", max_length=2000)
    gender: str = ""
    photo_folder: str = ""
    primary_photo: str = ""
    photo_file_names: list[str] = Field(default_factory=list, max_length=50)


class SettingsUpdate(BaseModel):
    """Request body for PATCH /api/me/settings (partial)."""

    display_name: str | None = Field(default=None, max_length=2000)
    birthdate: str | None = Field(default=None, description="YYYY-MM-DD, or empty to clear")
    location: str | None = Field(default=None, max_length=2000)
    language: str | None = None


class PhotoFileIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    content_type: str
    size: int = Field(..., ge=0)


class PhotoUploadPlanRequest(BaseModel):
    """Request body for POST /api/me/photos/plan."""

    files: list[PhotoFileIn] = Field(..., max_length=20)


class PhotoUploadPlanResponse(BaseModel):
    folder: str
    object_paths: list[str]
    file_names: list[str]
    primary_photo: str
