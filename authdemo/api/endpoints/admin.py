"""Privileged admin API: delete, disable and enable users; list users with roles.

Every route requires a verified ID token whose owner currently holds the
``admin`` role, then performs exactly one identity-service call.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from authdemo.api.dependencies import get_user_directory_service, require_admin
from authdemo.application.services.admin_service import validate_user_id
from authdemo.application.services.user_directory_service import UserDirectoryService
from authdemo.core.limiter import limit_admin_writes
from authdemo.domain.entities.identity import AuthIdentity
from authdemo.schemas.admin import AdminActionResponse, ManagedUserResponse

router = APIRouter()

UserIdQuery = Annotated[str | None, Query(alias="userId", description="Target user id")]


@router.delete("/deleteUser", response_model=AdminActionResponse)
@limit_admin_writes
async def delete_user(
    request: Request,
    caller: Annotated[AuthIdentity, Depends(require_admin)],
    directory: Annotated[UserDirectoryService, Depends(get_user_directory_service)],
    user_id: UserIdQuery = None,
) -> AdminActionResponse:
    """Delete the user's account. Deleting an already-deleted user returns 200."""
    target = validate_user_id(user_id)
    message = await directory.delete_user(target, actor_id=caller.id)
    return AdminActionResponse(message=message)


@router.post("/disableUser", response_model=AdminActionResponse)
@limit_admin_writes
async def disable_user(
    request: Request,
    caller: Annotated[AuthIdentity, Depends(require_admin)],
    directory: Annotated[UserDirectoryService, Depends(get_user_directory_service)],
    user_id: UserIdQuery = None,
) -> AdminActionResponse:
    """Disable the user's account. 404 if the user does not exist."""
    target = validate_user_id(user_id)
    message = await directory.set_disabled(target, True, actor_id=caller.id)
    return AdminActionResponse(message=message)


@router.post("/enableUser", response_model=AdminActionResponse)
@limit_admin_writes
async def enable_user(
    request: Request,
    caller: Annotated[AuthIdentity, Depends(require_admin)],
    directory: Annotated[UserDirectoryService, Depends(get_user_directory_service)],
    user_id: UserIdQuery = None,
) -> AdminActionResponse:
    """Enable the user's account. 404 if the user does not exist."""
    target = validate_user_id(user_id)
    message = await directory.set_disabled(target, False, actor_id=caller.id)
    return AdminActionResponse(message=message)


@router.get("/users", response_model=list[ManagedUserResponse])
async def list_users(
    _: Annotated[AuthIdentity, Depends(require_admin)],
    directory: Annotated[UserDirectoryService, Depends(get_user_directory_service)],
) -> list[ManagedUserResponse]:
    """All role records with email, display name and status from the identity service."""
    users = await directory.list_users()
    return [ManagedUserResponse.model_validate(u) for u in users]
