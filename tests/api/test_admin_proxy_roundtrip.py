"""HttpAdminProxy against the real admin endpoints (ASGI transport, in-memory Firebase fakes)."""

import pytest
from httpx import ASGITransport, AsyncClient

from authdemo.application.services.admin_service import AdminService
from authdemo.application.services.session_service import SessionContext
from authdemo.domain.enums import Role
from authdemo.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from authdemo.infrastructure.external.admin_proxy_http import HttpAdminProxy
from authdemo.main import app
from tests.fakes import (
    ADMIN_TOKEN,
    USER_TOKEN,
    FakeCredentialService,
    FakeIdentityAdmin,
    InMemoryRoleStore,
)


def _proxy(http: AsyncClient, token: str) -> HttpAdminProxy:
    async def token_provider() -> str:
        return token

    return HttpAdminProxy("http://test", token_provider, http_client=http)


@pytest.fixture
async def http(client: AsyncClient) -> AsyncClient:
    """Second client on the same app; ``client`` installs the dependency overrides."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def test_proxy_disable_and_enable(http: AsyncClient, identity_admin: FakeIdentityAdmin) -> None:
    """The proxy returns the server's message and the identity flag flips."""
    proxy = _proxy(http, ADMIN_TOKEN)
    assert await proxy.disable_user("u1") == "User disabled successfully"
    assert identity_admin.users["u1"].disabled is True
    assert await proxy.enable_user("u1") == "User enabled successfully"
    assert identity_admin.users["u1"].disabled is False


async def test_proxy_delete_is_idempotent(http: AsyncClient) -> None:
    proxy = _proxy(http, ADMIN_TOKEN)
    assert await proxy.delete_user("u2") == "User deleted successfully"
    assert await proxy.delete_user("u2") == "User already deleted"


async def _admin_service(
    http: AsyncClient, role_store: InMemoryRoleStore, identity_admin: FakeIdentityAdmin
) -> tuple[AdminService, SessionContext, FakeCredentialService]:
    """Admin console for admin1, sharing the role store the server reads."""
    credentials = FakeCredentialService(identity_admin.users["admin1"])
    session = SessionContext(credentials, role_store)
    await session.start()
    await session.wait_until_ready(timeout=1)
    return AdminService(role_store, _proxy(http, ADMIN_TOKEN), session), session, credentials


async def test_admin_can_disable_own_account(
    http: AsyncClient, role_store: InMemoryRoleStore, identity_admin: FakeIdentityAdmin
) -> None:
    """Self-disable passes the server's admin check, then marks the role and signs out."""
    service, session, credentials = await _admin_service(http, role_store, identity_admin)
    result = await service.disable_user("admin1")
    assert result.message == "User disabled successfully"
    assert identity_admin.users["admin1"].disabled is True
    assert role_store.records["admin1"].role == Role.DISABLED
    assert ("sign_out",) in credentials.calls
    assert session.user is None
    await session.close()


async def test_admin_can_delete_own_account(
    http: AsyncClient, role_store: InMemoryRoleStore, identity_admin: FakeIdentityAdmin
) -> None:
    """Self-delete removes the identity and the role record, then signs out."""
    service, session, credentials = await _admin_service(http, role_store, identity_admin)
    result = await service.delete_user("admin1")
    assert result.message == "User deleted successfully"
    assert "admin1" not in identity_admin.users
    assert "admin1" not in role_store.records
    assert ("sign_out",) in credentials.calls
    await session.close()


async def test_proxy_maps_error_statuses_to_exceptions(http: AsyncClient) -> None:
    """401, 403, 400 and 404 come back as the matching domain exceptions."""
    with pytest.raises(AuthenticationException):
        await _proxy(http, "bogus").disable_user("u1")
    with pytest.raises(AuthorizationException):
        await _proxy(http, USER_TOKEN).disable_user("u2")
    with pytest.raises(ValidationException):
        await _proxy(http, ADMIN_TOKEN).disable_user("   ")
    with pytest.raises(ResourceNotFoundException):
        await _proxy(http, ADMIN_TOKEN).enable_user("nobody")
