"""Client session mirror: signed-in user plus role, kept in step with auth events.

Each auth event bumps a sequence number before its role fetch starts; a
fetch that finishes after a newer event is discarded, so a slow read for a
previous user can never overwrite the current one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from authdemo.application.dtos.session import SessionState
from authdemo.application.interfaces.repositories import IRoleStore
from authdemo.application.interfaces.services import ICredentialService, Unsubscribe
from authdemo.domain.entities.identity import AuthIdentity
from authdemo.domain.enums import Role

logger = logging.getLogger(__name__)

SessionListener = Callable[[SessionState], None]


class SessionContext:
    """Owned session object; create one per client and ``start()`` it (or use ``async with``)."""

    def __init__(self, credentials: ICredentialService, role_store: IRoleStore) -> None:
        self._credentials = credentials
        self._role_store = role_store
        self._state = SessionState()
        self._seq = 0
        self._ready = asyncio.Event()
        self._fetch: asyncio.Task[None] | None = None
        self._unsubscribe_auth: Unsubscribe | None = None
        self._listeners: list[SessionListener] = []

    async def __aenter__(self) -> "SessionContext":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def user(self) -> AuthIdentity | None:
        return self._state.user

    @property
    def role(self) -> Role:
        return self._state.role

    @property
    def loading(self) -> bool:
        return self._state.loading

    async def start(self) -> None:
        """Subscribe to auth events. Calling it twice is a no-op."""
        if self._unsubscribe_auth is None:
            self._unsubscribe_auth = self._credentials.on_auth_state_change(self._on_auth_state)

    async def close(self) -> None:
        """Unsubscribe and cancel any in-flight role fetch."""
        if self._unsubscribe_auth is not None:
            self._unsubscribe_auth()
            self._unsubscribe_auth = None
        fetch, self._fetch = self._fetch, None
        if fetch is not None and not fetch.done():
            fetch.cancel()
            try:
                await fetch
            except asyncio.CancelledError:
                pass

    async def wait_until_ready(self, timeout: float | None = None) -> SessionState:
        """Wait until the first auth event (and its role fetch) has been processed."""
        await asyncio.wait_for(self._ready.wait(), timeout)
        return self._state

    def subscribe(self, listener: SessionListener) -> Unsubscribe:
        """Call listener with the current state now and on every change."""
        self._listeners.append(listener)
        listener(self._state)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def sign_out(self) -> None:
        await self._credentials.sign_out()

    def _set_state(self, state: SessionState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def _on_auth_state(self, user: AuthIdentity | None) -> None:
        self._seq += 1
        seq = self._seq
        if self._fetch is not None and not self._fetch.done():
            self._fetch.cancel()
        self._fetch = None
        if user is None:
            self._set_state(SessionState(user=None, role=Role.USER, loading=False))
            self._ready.set()
            return
        previous = self._state
        role = previous.role if previous.user and previous.user.id == user.id else Role.USER
        self._set_state(SessionState(user=user, role=role, loading=not self._ready.is_set()))
        self._fetch = asyncio.create_task(self._load_role(seq, user))

    async def _load_role(self, seq: int, user: AuthIdentity) -> None:
        try:
            role = await self._role_store.get_role(user.id)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.warning("Role fetch failed for %s; defaulting to user", user.id, exc_info=True)
            role = Role.USER
        if seq != self._seq:
            logger.debug(
                "Discarding stale role fetch for %s (event %d, current %d)", user.id, seq, self._seq
            )
            return
        self._set_state(SessionState(user=user, role=role, loading=False))
        self._ready.set()
