"""Firestore-backed store implementations."""

from authdemo.infrastructure.firebase.repositories.profile_store_firestore import (
    FirestoreProfileStore,
)
from authdemo.infrastructure.firebase.repositories.role_store_firestore import (
    FirestoreRoleStore,
)

__all__ = [
    "FirestoreProfileStore",
    "FirestoreRoleStore",
]
