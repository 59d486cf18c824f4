"""Domain layer: entities, enums, exceptions and the verification policy.

No dependencies on infrastructure or presentation.
"""

from authdemo.domain.entities import AuthIdentity, ProfileDocument, RoleRecord
from authdemo.domain.enums import AdminAction, ProviderId, Role
from authdemo.domain.exceptions import (
    AuthDemoException,
    AuthenticationException,
    AuthorizationException,
    DownstreamUnavailableException,
    IdentityServiceException,
    PartialFailureException,
    ResourceNotFoundException,
    ServiceNotConfiguredException,
    ValidationException,
)
from authdemo.domain.verification import EmailVerificationPolicy

__all__ = [
    # Entities
    "AuthIdentity",
    "ProfileDocument",
    "RoleRecord",
    # Enums
    "AdminAction",
    "ProviderId",
    "Role",
    # Exceptions
    "AuthDemoException",
    "AuthenticationException",
    "AuthorizationException",
    "DownstreamUnavailableException",
    "IdentityServiceException",
    "PartialFailureException",
    "ResourceNotFoundException",
    "ServiceNotConfiguredException",
    "ValidationException",
    # Policies
    "EmailVerificationPolicy",
]
