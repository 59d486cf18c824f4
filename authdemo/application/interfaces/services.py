"""Service interfaces (ports) for the application layer.

Protocols define contracts for the identity platform and the admin proxy (DIP).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from authdemo.domain.entities.identity import AuthIdentity

AuthStateListener = Callable[["AuthIdentity | None"], None]
Unsubscribe = Callable[[], None]


# Credential service interface (client-side identity operations)
class ICredentialService(Protocol):
    """Protocol for the signed-in user's own identity operations."""

    @property
    def current_user(self) -> AuthIdentity | None:
        """The signed-in identity, or None."""

    async def sign_up(self, email: str, password: str) -> AuthIdentity:
        """Create an email/password identity and sign it in."""

    async def sign_in(self, email: str, password: str) -> AuthIdentity:
        """Sign in with email and password."""

    async def sign_in_with_provider(self, provider_id: str, credential: str) -> AuthIdentity:
        """Sign in with a Google ID token or a Facebook access token."""

    async def sign_out(self) -> None:
        """Forget the session; listeners observe None."""

    async def send_verification_email(self) -> None:
        """Send a verification email to the signed-in user."""

    async def reset_password(self, email: str) -> None:
        """Send a password reset email."""

    async def update_password(self, current_password: str, new_password: str) -> None:
        """Re-authenticate with the current password, then set the new one."""

    async def update_profile(self, display_name: str) -> AuthIdentity:
        """Set the signed-in user's display name."""

    async def delete_user(self) -> None:
        """Delete the signed-in user's identity and sign out."""

    async def get_id_token(self, force_refresh: bool = False) -> str:
        """Return a valid ID token for the signed-in user, refreshing when expired."""

    def on_auth_state_change(self, listener: AuthStateListener) -> Unsubscribe:
        """Call listener with the current user now and on every sign-in/out."""


# Privileged identity admin interface (server-side)
class IIdentityAdmin(Protocol):
    """Protocol for service-account identity operations."""

    async def get_user(self, user_id: str) -> AuthIdentity | None:
        """Return the identity, or None when it does not exist."""

    async def delete_user(self, user_id: str) -> bool:
        """Delete the identity. Returns False when it was already absent."""

    async def update_user(self, user_id: str, *, disabled: bool) -> AuthIdentity:
        """Set the disabled flag. Raises ResourceNotFoundException for unknown users."""

    async def verify_id_token(self, token: str) -> AuthIdentity:
        """Verify an ID token and return the caller. Raises AuthenticationException."""


# Admin proxy client interface (client-side)
class IAdminProxy(Protocol):
    """Protocol for the privileged proxy endpoints as seen by the client."""

    async def delete_user(self, user_id: str) -> str:
        """Delete the identity; returns the server's message."""

    async def disable_user(self, user_id: str) -> str:
        """Disable the identity; returns the server's message."""

    async def enable_user(self, user_id: str) -> str:
        """Enable the identity; returns the server's message."""
