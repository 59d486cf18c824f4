"""Email verification policy.

Which sign-in providers may skip email verification is a product decision,
so it is a named, configurable rule rather than an inline special case.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from authdemo.domain.entities.identity import AuthIdentity


@dataclass(frozen=True)
class EmailVerificationPolicy:
    """Decide whether an identity may use the app without a verified email.

    A user linked to any exempt provider counts as verified.
    """

    exempt_providers: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_providers(cls, providers: Iterable[str]) -> "EmailVerificationPolicy":
        return cls(frozenset(p for p in providers if p))

    def is_exempt(self, identity: AuthIdentity) -> bool:
        return bool(self.exempt_providers & identity.providers)

    def is_satisfied(self, identity: AuthIdentity) -> bool:
        """True when the identity has a verified email or signed in with an exempt provider."""
        return identity.email_verified or self.is_exempt(identity)
