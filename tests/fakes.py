"""In-memory stand-ins for the Firebase-backed stores and services.

Each fake records what it was asked to do and can be told to fail, so
tests can drive partial failures and races without a network.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace

from authdemo.application.error_messages import SESSION_EXPIRED_MESSAGE
from authdemo.domain.entities.identity import AuthIdentity
from authdemo.domain.entities.profile import ProfileDocument
from authdemo.domain.entities.role_record import RoleRecord
from authdemo.domain.enums import Role
from authdemo.domain.exceptions import (
    AuthenticationException,
    DownstreamUnavailableException,
    ResourceNotFoundException,
)
from authdemo.shared.utils.datetime import utc_now

ADMIN_TOKEN = "admin-token"
USER_TOKEN = "user-token"


class InMemoryRoleStore:
    def __init__(self, records: dict[str, Role] | None = None) -> None:
        self.records: dict[str, RoleRecord] = {}
        for user_id, role in (records or {}).items():
            self.records[user_id] = RoleRecord(user_id, role, utc_now(), None)
        self.read_error: Exception | None = None
        self.write_error: Exception | None = None
        # user id -> event the next read waits on (to hold a read in flight)
        self.read_gates: dict[str, asyncio.Event] = {}
        self.writes: list[tuple[str, str, object]] = []

    async def get_record(self, user_id: str) -> RoleRecord | None:
        gate = self.read_gates.get(user_id)
        if gate is not None:
            await gate.wait()
        if self.read_error is not None:
            raise self.read_error
        return self.records.get(user_id)

    async def get_role(self, user_id: str) -> Role:
        record = await self.get_record(user_id)
        return record.role if record else Role.USER

    async def set_role(
        self, user_id: str, role: Role, updated_by: str | None = None
    ) -> RoleRecord:
        if self.write_error is not None:
            raise self.write_error
        record = RoleRecord(user_id, role, utc_now(), updated_by)
        self.records[user_id] = record
        self.writes.append(("set", user_id, role))
        return record

    async def delete_role(self, user_id: str) -> None:
        if self.write_error is not None:
            raise self.write_error
        self.records.pop(user_id, None)
        self.writes.append(("delete", user_id, None))

    async def list_all_roles(self) -> list[RoleRecord]:
        if self.read_error is not None:
            raise self.read_error
        return list(self.records.values())


class InMemoryProfileStore:
    def __init__(self) -> None:
        self.profiles: dict[str, ProfileDocument] = {}

    async def get(self, user_id: str) -> ProfileDocument | None:
        return self.profiles.get(user_id)

    async def merge(self, user_id: str, fields: dict[str, str]) -> ProfileDocument:
        current = self.profiles.get(user_id) or ProfileDocument()
        self.profiles[user_id] = replace(current, **fields)
        return self.profiles[user_id]


class FakeIdentityAdmin:
    """Identity directory keyed by user id; ID tokens map to user ids."""

    def __init__(self) -> None:
        self.users: dict[str, AuthIdentity] = {}
        self.tokens: dict[str, str] = {}
        self.lookup_failures: set[str] = set()
        self.calls: list[tuple[str, str]] = []

    def add_user(self, user: AuthIdentity, token: str | None = None) -> AuthIdentity:
        self.users[user.id] = user
        if token:
            self.tokens[token] = user.id
        return user

    async def verify_id_token(self, token: str) -> AuthIdentity:
        if token == "expired-token":
            raise AuthenticationException(SESSION_EXPIRED_MESSAGE)
        user_id = self.tokens.get(token)
        if user_id is None or user_id not in self.users:
            raise AuthenticationException("Invalid authentication token")
        return self.users[user_id]

    async def get_user(self, user_id: str) -> AuthIdentity | None:
        if user_id in self.lookup_failures:
            raise DownstreamUnavailableException("Identity service", "HTTP 500")
        return self.users.get(user_id)

    async def delete_user(self, user_id: str) -> bool:
        self.calls.append(("delete", user_id))
        return self.users.pop(user_id, None) is not None

    async def update_user(self, user_id: str, *, disabled: bool) -> AuthIdentity:
        self.calls.append(("disable" if disabled else "enable", user_id))
        if user_id not in self.users:
            raise ResourceNotFoundException("user", user_id)
        self.users[user_id] = replace(self.users[user_id], disabled=disabled)
        return self.users[user_id]


class FakeAdminProxy:
    """Client view of the admin endpoints, backed by a FakeIdentityAdmin."""

    def __init__(self, directory: FakeIdentityAdmin) -> None:
        self.directory = directory
        self.error: Exception | None = None
        self.calls: list[tuple[str, str]] = []

    def _check(self, action: str, user_id: str) -> None:
        self.calls.append((action, user_id))
        if self.error is not None:
            raise self.error

    async def delete_user(self, user_id: str) -> str:
        self._check("delete", user_id)
        deleted = await self.directory.delete_user(user_id)
        return "User deleted successfully" if deleted else "User already deleted"

    async def disable_user(self, user_id: str) -> str:
        self._check("disable", user_id)
        await self.directory.update_user(user_id, disabled=True)
        return "User disabled successfully"

    async def enable_user(self, user_id: str) -> str:
        self._check("enable", user_id)
        await self.directory.update_user(user_id, disabled=False)
        return "User enabled successfully"


class FakeCredentialService:
    """Signed-in user plus auth-state listeners; ``emit`` simulates auth events."""

    def __init__(self, user: AuthIdentity | None = None) -> None:
        self._user = user
        self._listeners: list = []
        self.calls: list[tuple] = []
        self.delete_error: Exception | None = None
        self.next_sign_in: AuthIdentity | None = None

    @property
    def current_user(self) -> AuthIdentity | None:
        return self._user

    def emit(self, user: AuthIdentity | None) -> None:
        self._user = user
        for listener in list(self._listeners):
            listener(user)

    def on_auth_state_change(self, listener):
        self._listeners.append(listener)
        listener(self._user)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    async def sign_up(self, email: str, password: str) -> AuthIdentity:
        self.calls.append(("sign_up", email))
        self.emit(AuthIdentity(id="new-user", email=email, providers=frozenset({"password"})))
        return self._user

    async def sign_in(self, email: str, password: str) -> AuthIdentity:
        self.calls.append(("sign_in", email))
        self.emit(self.next_sign_in or AuthIdentity(id="u1", email=email))
        return self._user

    async def sign_in_with_provider(self, provider_id: str, credential: str) -> AuthIdentity:
        self.calls.append(("sign_in_with_provider", provider_id))
        self.emit(self.next_sign_in)
        return self._user

    async def sign_out(self) -> None:
        self.calls.append(("sign_out",))
        self.emit(None)

    async def send_verification_email(self) -> None:
        self.calls.append(("send_verification_email",))

    async def reset_password(self, email: str) -> None:
        self.calls.append(("reset_password", email))

    async def update_password(self, current_password: str, new_password: str) -> None:
        self.calls.append(("update_password", current_password, new_password))

    async def update_profile(self, display_name: str) -> AuthIdentity:
        self.calls.append(("update_profile", display_name))
        self.emit(replace(self._user, display_name=display_name))
        return self._user

    async def delete_user(self) -> None:
        self.calls.append(("delete_user",))
        if self.delete_error is not None:
            raise self.delete_error
        self.emit(None)

    async def get_id_token(self, force_refresh: bool = False) -> str:
        if self._user is None:
            raise AuthenticationException()
        return f"token-{self._user.id}"
