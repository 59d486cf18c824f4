"""AuthIdentity: the identity service's view of a user."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AuthIdentity:
    """A user as known to the credential service.

    ``providers`` holds provider ids (``password``, ``google.com``,
    ``facebook.com``). Only a privileged caller flips ``disabled``.
    """

    id: str
    email: str | None = None
    email_verified: bool = False
    display_name: str | None = None
    providers: frozenset[str] = field(default_factory=frozenset)
    disabled: bool = False

    def has_provider(self, provider_id: str) -> bool:
        return provider_id in self.providers
