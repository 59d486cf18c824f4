"""Current-user API tests: /api/me, profile, settings and photo upload plans."""

from httpx import AsyncClient

from authdemo.domain.entities.identity import AuthIdentity
from tests.fakes import FakeIdentityAdmin, InMemoryProfileStore


async def test_me_requires_token(client: AsyncClient) -> None:
    response = await client.get("/api/me")
    assert response.status_code == 401


async def test_me_returns_identity_role_and_verification(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.get("/api/me", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == "admin1"
    assert data["role"] == "admin"
    assert data["providers"] == ["password"]
    assert data["verification_satisfied"] is True


async def test_facebook_user_skips_email_verification(
    client: AsyncClient, identity_admin: FakeIdentityAdmin
) -> None:
    """Unverified Facebook users satisfy the verification policy; email users do not."""
    identity_admin.add_user(
        AuthIdentity(id="fb", email="f@x.com", providers=frozenset({"facebook.com"})),
        token="fb-token",
    )
    identity_admin.add_user(
        AuthIdentity(id="pw", email="p@x.com", providers=frozenset({"password"})),
        token="pw-token",
    )
    fb = await client.get("/api/me", headers={"Authorization": "Bearer fb-token"})
    pw = await client.get("/api/me", headers={"Authorization": "Bearer pw-token"})
    assert fb.json()["verification_satisfied"] is True
    assert fb.json()["role"] == "user"
    assert pw.json()["verification_satisfied"] is False


async def test_profile_defaults_then_save(
    client: AsyncClient,
    user_headers: dict[str, str],
    profile_store: InMemoryProfileStore,
) -> None:
    """GET on an unsaved profile returns defaults; PUT saves the profile page fields."""
    response = await client.get("/api/me/profile", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["language"] == "English"

    response = await client.put(
        "/api/me/profile",
        json={"bio": "Hello", "gender": "other", "photo_folder": "users/u1/photos/"},
        headers=user_headers,
    )
    assert response.status_code == 200
    assert response.json()["bio"] == "Hello"
    assert profile_store.profiles["u1"].gender == "other"


async def test_profile_rejects_unknown_gender(
    client: AsyncClient, user_headers: dict[str, str]
) -> None:
    response = await client.put(
        "/api/me/profile", json={"gender": "robot"}, headers=user_headers
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "gender"}


async def test_settings_patch_keeps_omitted_fields(
    client: AsyncClient, user_headers: dict[str, str]
) -> None:
    """PATCH only changes the fields present in the body."""
    await client.patch(
        "/api/me/settings",
        json={"display_name": "Ann", "location": "Lisbon"},
        headers=user_headers,
    )
    response = await client.patch(
        "/api/me/settings", json={"language": "German"}, headers=user_headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["display_name"] == "Ann"
    assert data["location"] == "Lisbon"
    assert data["language"] == "German"


async def test_settings_rejects_underage_birthdate(
    client: AsyncClient, user_headers: dict[str, str]
) -> None:
    response = await client.patch(
        "/api/me/settings", json={"birthdate": "2099-01-01"}, headers=user_headers
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "birthdate"}


async def test_photo_plan_returns_paths_in_own_folder(
    client: AsyncClient, user_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/api/me/photos/plan",
        json={"files": [{"name": "me.png", "content_type": "image/png", "size": 1024}]},
        headers=user_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["folder"] == "users/u1/photos/"
    assert data["object_paths"][0].startswith("users/u1/photos/")
    assert data["object_paths"][0].endswith("-me.png")
    assert data["primary_photo"] == data["file_names"][0]


async def test_photo_plan_rejects_large_files(
    client: AsyncClient, user_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/api/me/photos/plan",
        json={"files": [{"name": "big.jpg", "content_type": "image/jpeg", "size": 3_000_000}]},
        headers=user_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Each file must be less than 2MB."
