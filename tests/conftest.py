"""Pytest configuration and fixtures for authdemo.

HTTP tests run against authdemo.main:app over ASGITransport with the
Firebase-backed dependencies replaced by the in-memory fakes in
tests/fakes.py (app.dependency_overrides).
"""

import pytest
from httpx import ASGITransport, AsyncClient

from authdemo.api.dependencies import get_identity_admin, get_profile_store, get_role_store
from authdemo.core.limiter import limiter
from authdemo.domain.entities.identity import AuthIdentity
from authdemo.domain.enums import Role
from authdemo.main import app
from tests.fakes import (
    ADMIN_TOKEN,
    USER_TOKEN,
    FakeIdentityAdmin,
    InMemoryProfileStore,
    InMemoryRoleStore,
)


@pytest.fixture
def identity_admin() -> FakeIdentityAdmin:
    """Directory with an admin (admin1) and two regular users (u1, u2)."""
    directory = FakeIdentityAdmin()
    directory.add_user(
        AuthIdentity(id="admin1", email="admin@x.com", email_verified=True,
                     providers=frozenset({"password"})),
        token=ADMIN_TOKEN,
    )
    directory.add_user(
        AuthIdentity(id="u1", email="a@x.com", email_verified=True,
                     providers=frozenset({"password"})),
        token=USER_TOKEN,
    )
    directory.add_user(AuthIdentity(id="u2", email="b@x.com", providers=frozenset({"google.com"})))
    return directory


@pytest.fixture
def role_store() -> InMemoryRoleStore:
    return InMemoryRoleStore({"admin1": Role.ADMIN, "u1": Role.USER, "u2": Role.USER})


@pytest.fixture
def profile_store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
async def client(
    identity_admin: FakeIdentityAdmin,
    role_store: InMemoryRoleStore,
    profile_store: InMemoryProfileStore,
) -> AsyncClient:
    """Async HTTP client against the FastAPI app with in-memory Firebase fakes."""
    app.dependency_overrides[get_identity_admin] = lambda: identity_admin
    app.dependency_overrides[get_role_store] = lambda: role_store
    app.dependency_overrides[get_profile_store] = lambda: profile_store
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def unconfigured_client() -> AsyncClient:
    """Client against the app with no Firebase service account (no overrides)."""
    app.dependency_overrides.clear()
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def user_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {USER_TOKEN}"}
