"""Admin API tests: /api/admin/deleteUser, disableUser, enableUser and users."""

from httpx import AsyncClient

from authdemo.domain.enums import Role
from tests.fakes import FakeIdentityAdmin, InMemoryRoleStore


async def test_missing_authorization_returns_401(client: AsyncClient) -> None:
    """No bearer token: 401 with WWW-Authenticate and the auth error code."""
    response = await client.delete("/api/admin/deleteUser", params={"userId": "u1"})
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    data = response.json()
    assert data["error"] == "AUTHENTICATION_ERROR"
    assert data["message"] == "Missing or invalid Authorization header"


async def test_invalid_token_returns_401(client: AsyncClient) -> None:
    response = await client.post(
        "/api/admin/disableUser",
        params={"userId": "u1"},
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid authentication token"


async def test_expired_token_returns_session_expired(client: AsyncClient) -> None:
    response = await client.post(
        "/api/admin/disableUser",
        params={"userId": "u1"},
        headers={"Authorization": "Bearer expired-token"},
    )
    assert response.status_code == 401
    assert "session has expired" in response.json()["message"]


async def test_non_admin_returns_403_and_changes_nothing(
    client: AsyncClient,
    user_headers: dict[str, str],
    identity_admin: FakeIdentityAdmin,
) -> None:
    """A regular user cannot disable anyone; no identity call is made."""
    response = await client.post(
        "/api/admin/disableUser", params={"userId": "u2"}, headers=user_headers
    )
    assert response.status_code == 403
    assert response.json()["error"] == "PERMISSION_DENIED"
    assert identity_admin.calls == []


async def test_missing_user_id_returns_400(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.delete("/api/admin/deleteUser", headers=admin_headers)
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "VALIDATION_ERROR"
    assert data["message"] == "User ID is required"
    assert data["details"] == {"field": "userId"}


async def test_delete_user_then_again_is_idempotent(
    client: AsyncClient,
    admin_headers: dict[str, str],
    identity_admin: FakeIdentityAdmin,
) -> None:
    """First delete removes the identity; the second reports it was already gone."""
    first = await client.delete(
        "/api/admin/deleteUser", params={"userId": "u2"}, headers=admin_headers
    )
    assert first.status_code == 200
    assert first.json() == {"success": True, "message": "User deleted successfully"}
    assert "u2" not in identity_admin.users

    second = await client.delete(
        "/api/admin/deleteUser", params={"userId": "u2"}, headers=admin_headers
    )
    assert second.status_code == 200
    assert second.json()["message"] == "User already deleted"


async def test_disable_and_enable_user(
    client: AsyncClient,
    admin_headers: dict[str, str],
    identity_admin: FakeIdentityAdmin,
) -> None:
    response = await client.post(
        "/api/admin/disableUser", params={"userId": "u1"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["message"] == "User disabled successfully"
    assert identity_admin.users["u1"].disabled is True

    response = await client.post(
        "/api/admin/enableUser", params={"userId": "u1"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["message"] == "User enabled successfully"
    assert identity_admin.users["u1"].disabled is False


async def test_disable_unknown_user_returns_404(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/api/admin/disableUser", params={"userId": "nobody"}, headers=admin_headers
    )
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_demoted_admin_is_refused(
    client: AsyncClient,
    admin_headers: dict[str, str],
    role_store: InMemoryRoleStore,
) -> None:
    """Admin role is checked against the role store on every request."""
    await role_store.set_role("admin1", Role.USER)
    response = await client.post(
        "/api/admin/disableUser", params={"userId": "u1"}, headers=admin_headers
    )
    assert response.status_code == 403


async def test_list_users_joins_identity_details(
    client: AsyncClient,
    admin_headers: dict[str, str],
    identity_admin: FakeIdentityAdmin,
) -> None:
    """Each role record carries email and status; failed lookups leave them null."""
    identity_admin.lookup_failures.add("u2")
    response = await client.get("/api/admin/users", headers=admin_headers)
    assert response.status_code == 200
    rows = {row["user_id"]: row for row in response.json()}
    assert set(rows) == {"admin1", "u1", "u2"}
    assert rows["admin1"]["role"] == "admin"
    assert rows["u1"]["email"] == "a@x.com"
    assert rows["u1"]["disabled"] is False
    assert rows["u2"]["email"] is None
    assert rows["u2"]["role"] == "user"


async def test_admin_endpoints_unconfigured_return_503(
    unconfigured_client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    """Without a service account the privileged endpoints answer 503."""
    response = await unconfigured_client.post(
        "/api/admin/disableUser", params={"userId": "u1"}, headers=admin_headers
    )
    assert response.status_code == 503
    data = response.json()
    assert data["error"] == "SERVICE_UNAVAILABLE"
    assert "not configured" in data["message"]
