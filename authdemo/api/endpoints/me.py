"""Current-user API backing the profile and settings pages (owner only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from authdemo.api.dependencies import (
    get_current_identity,
    get_profile_service,
    get_role_store,
    get_verification_policy,
)
from authdemo.application.dtos.profile import PhotoFile
from authdemo.application.interfaces.repositories import IRoleStore
from authdemo.application.services.profile_service import ProfileService
from authdemo.core.limiter import limit_self_service_writes
from authdemo.domain.entities.identity import AuthIdentity
from authdemo.domain.verification import EmailVerificationPolicy
from authdemo.schemas.profile import (
    MeResponse,
    PhotoUploadPlanRequest,
    PhotoUploadPlanResponse,
    ProfileResponse,
    ProfileUpdate,
    SettingsUpdate,
)

router = APIRouter()


@router.get("", response_model=MeResponse)
async def get_me(
    identity: Annotated[AuthIdentity, Depends(get_current_identity)],
    role_store: Annotated[IRoleStore, Depends(get_role_store)],
    policy: Annotated[EmailVerificationPolicy, Depends(get_verification_policy)],
) -> MeResponse:
    """Identity from the token, current role and whether email verification is satisfied."""
    role = await role_store.get_role(identity.id)
    return MeResponse(
        id=identity.id,
        email=identity.email,
        email_verified=identity.email_verified,
        display_name=identity.display_name,
        providers=sorted(identity.providers),
        role=role,
        verification_satisfied=policy.is_satisfied(identity),
    )


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    identity: Annotated[AuthIdentity, Depends(get_current_identity)],
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
) -> ProfileResponse:
    profile = await profiles.get_profile(identity.id)
    return ProfileResponse.model_validate(profile)


@router.put("/profile", response_model=ProfileResponse)
@limit_self_service_writes
async def save_profile(
    request: Request,
    body: ProfileUpdate,
    identity: Annotated[AuthIdentity, Depends(get_current_identity)],
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
) -> ProfileResponse:
    """Save the profile page fields; settings fields are kept."""
    profile = await profiles.save_profile(identity.id, **body.model_dump())
    return ProfileResponse.model_validate(profile)


@router.patch("/settings", response_model=ProfileResponse)
@limit_self_service_writes
async def update_settings(
    request: Request,
    body: SettingsUpdate,
    identity: Annotated[AuthIdentity, Depends(get_current_identity)],
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
) -> ProfileResponse:
    """Update the settings page fields given in the body; omitted ones keep their value."""
    current = await profiles.get_profile(identity.id)
    values = {
        "display_name": current.display_name,
        "birthdate": current.birthdate,
        "location": current.location,
        "language": current.language,
    }
    values.update({k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None})
    profile = await profiles.update_settings(identity.id, **values)
    return ProfileResponse.model_validate(profile)


@router.post("/photos/plan", response_model=PhotoUploadPlanResponse)
async def plan_photo_upload(
    body: PhotoUploadPlanRequest,
    identity: Annotated[AuthIdentity, Depends(get_current_identity)],
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
) -> PhotoUploadPlanResponse:
    """Validate picked photos and return the storage paths to upload them to."""
    current = await profiles.get_profile(identity.id)
    plan = profiles.plan_photo_upload(
        identity.id,
        [PhotoFile(name=f.name, content_type=f.content_type, size=f.size) for f in body.files],
        existing_folder=current.photo_folder,
        primary_photo=current.primary_photo,
    )
    return PhotoUploadPlanResponse(
        folder=plan.folder,
        object_paths=[u.object_path for u in plan.uploads],
        file_names=plan.file_names,
        primary_photo=plan.primary_photo,
    )
