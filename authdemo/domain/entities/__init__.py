"""Domain entities (frozen dataclasses, no infrastructure dependencies)."""

from authdemo.domain.entities.identity import AuthIdentity
from authdemo.domain.entities.profile import DEFAULT_LANGUAGE, ProfileDocument
from authdemo.domain.entities.role_record import RoleRecord

__all__ = [
    "AuthIdentity",
    "DEFAULT_LANGUAGE",
    "ProfileDocument",
    "RoleRecord",
]
