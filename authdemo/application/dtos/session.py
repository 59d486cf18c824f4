"""Client session snapshot."""

from dataclasses import dataclass

from authdemo.domain.entities.identity import AuthIdentity
from authdemo.domain.enums import Role


@dataclass(frozen=True)
class SessionState:
    """What the client knows about the signed-in user.

    ``loading`` is True until the first auth event (and its role fetch) has
    been processed; ``role`` is meaningless while loading or signed out.
    """

    user: AuthIdentity | None = None
    role: Role = Role.USER
    loading: bool = True

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.role == Role.ADMIN
