"""Firebase Auth (Identity Toolkit) and Firestore integration over REST."""

from authdemo.infrastructure.firebase.client import FirebaseServices, init_firebase

__all__ = [
    "FirebaseServices",
    "init_firebase",
]
