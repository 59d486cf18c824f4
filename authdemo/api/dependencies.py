"""Presentation-layer dependency injection (composition root).

Stores and services are built here from the Firebase clients created in
the lifespan (request.app.state.firebase); routes depend only on these
dependencies. Tests override them via app.dependency_overrides.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from authdemo.application.interfaces.repositories import IProfileStore, IRoleStore
from authdemo.application.interfaces.services import IIdentityAdmin
from authdemo.application.services.profile_service import ProfileService
from authdemo.application.services.user_directory_service import UserDirectoryService
from authdemo.core.config import get_settings
from authdemo.domain.entities.identity import AuthIdentity
from authdemo.domain.enums import Role
from authdemo.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ServiceNotConfiguredException,
)
from authdemo.domain.verification import EmailVerificationPolicy
from authdemo.infrastructure.firebase.client import FirebaseServices
from authdemo.infrastructure.firebase.repositories import (
    FirestoreProfileStore,
    FirestoreRoleStore,
)

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False, description="Firebase ID token")


def get_firebase(request: Request) -> FirebaseServices:
    """Service-account clients; 503 when no service account is configured."""
    firebase = getattr(request.app.state, "firebase", None)
    if firebase is None:
        raise ServiceNotConfiguredException()
    return firebase


def get_identity_admin(
    firebase: Annotated[FirebaseServices, Depends(get_firebase)],
) -> IIdentityAdmin:
    return firebase.identity_admin


def get_role_store(
    firebase: Annotated[FirebaseServices, Depends(get_firebase)],
) -> IRoleStore:
    return FirestoreRoleStore(firebase.firestore)


def get_profile_store(
    firebase: Annotated[FirebaseServices, Depends(get_firebase)],
) -> IProfileStore:
    return FirestoreProfileStore(firebase.firestore)


def get_profile_service(
    store: Annotated[IProfileStore, Depends(get_profile_store)],
) -> ProfileService:
    return ProfileService(store)


def get_user_directory_service(
    identity_admin: Annotated[IIdentityAdmin, Depends(get_identity_admin)],
    role_store: Annotated[IRoleStore, Depends(get_role_store)],
) -> UserDirectoryService:
    return UserDirectoryService(identity_admin, role_store)


def get_verification_policy() -> EmailVerificationPolicy:
    return EmailVerificationPolicy.from_providers(get_settings().exempt_providers)


async def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> str:
    """The raw bearer token; 401 when the Authorization header is missing or malformed."""
    if credentials is None or not credentials.credentials.strip():
        raise AuthenticationException("Missing or invalid Authorization header")
    return credentials.credentials.strip()


async def get_current_identity(
    token: Annotated[str, Depends(get_bearer_token)],
    identity_admin: Annotated[IIdentityAdmin, Depends(get_identity_admin)],
) -> AuthIdentity:
    """Caller identity from a verified Firebase ID token."""
    return await identity_admin.verify_id_token(token)


async def require_admin(
    caller: Annotated[AuthIdentity, Depends(get_current_identity)],
    role_store: Annotated[IRoleStore, Depends(get_role_store)],
) -> AuthIdentity:
    """Caller whose role record currently says ``admin``; 403 otherwise."""
    role = await role_store.get_role(caller.id)
    if role != Role.ADMIN:
        logger.warning("Privileged request refused for %s (role %s)", caller.id, role.value)
        raise AuthorizationException(
            "Only administrators can perform this action", required_role=Role.ADMIN.value
        )
    return caller
