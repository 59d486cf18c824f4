"""Application interfaces (ports): store and service protocols.

No runtime imports from authdemo.infrastructure or authdemo.api.
"""

from authdemo.application.interfaces.repositories import IProfileStore, IRoleStore
from authdemo.application.interfaces.services import (
    AuthStateListener,
    IAdminProxy,
    ICredentialService,
    IIdentityAdmin,
    Unsubscribe,
)

__all__ = [
    "AuthStateListener",
    "IAdminProxy",
    "ICredentialService",
    "IIdentityAdmin",
    "IProfileStore",
    "IRoleStore",
    "Unsubscribe",
]
