"""Tests for domain enums (Role), the verification policy and page routing."""

import pytest

from authdemo.application.dtos.session import SessionState
from authdemo.core.config import Settings
from authdemo.domain.entities.identity import AuthIdentity
from authdemo.domain.enums import Role
from authdemo.domain.verification import EmailVerificationPolicy
from authdemo.pages.routing import Page, resolve_page

FACEBOOK_ONLY = EmailVerificationPolicy.from_providers(["facebook.com", ""])

VERIFIED = AuthIdentity(id="u1", email="a@x.com", email_verified=True)
UNVERIFIED = AuthIdentity(id="u2", email="b@x.com", providers=frozenset({"password"}))
FACEBOOK = AuthIdentity(id="u3", providers=frozenset({"facebook.com"}))


class TestRole:
    """Role enum values and parse helper."""

    def test_values_returns_all_role_strings(self) -> None:
        assert Role.values() == ["user", "admin", "disabled"]

    def test_parse_known_and_unknown(self) -> None:
        assert Role.parse("admin") is Role.ADMIN
        assert Role.parse("root") is None
        assert Role.parse(None) is None


class TestEmailVerificationPolicy:
    def test_verified_email_satisfies(self) -> None:
        assert FACEBOOK_ONLY.is_satisfied(VERIFIED) is True

    def test_unverified_password_user_does_not(self) -> None:
        assert FACEBOOK_ONLY.is_satisfied(UNVERIFIED) is False

    def test_exempt_provider_skips_verification(self) -> None:
        assert FACEBOOK_ONLY.is_exempt(FACEBOOK) is True
        assert FACEBOOK_ONLY.is_satisfied(FACEBOOK) is True
        assert EmailVerificationPolicy().is_satisfied(FACEBOOK) is False


class TestResolvePage:
    """Which page the client renders for a path and session."""

    def test_public_pages_render_while_loading(self) -> None:
        assert resolve_page("/privacy-policy", SessionState()) == Page.PRIVACY_POLICY
        assert resolve_page("/data-deletion/", SessionState()) == Page.DATA_DELETION

    def test_nothing_renders_while_loading(self) -> None:
        assert resolve_page("/", SessionState()) == Page.NONE

    def test_signed_out_gets_landing(self) -> None:
        state = SessionState(user=None, loading=False)
        assert resolve_page("/admin", state) == Page.LANDING

    def test_unverified_gets_verify_email(self) -> None:
        state = SessionState(user=UNVERIFIED, loading=False)
        assert resolve_page("/profile", state, FACEBOOK_ONLY) == Page.VERIFY_EMAIL

    def test_facebook_user_reaches_welcome(self) -> None:
        state = SessionState(user=FACEBOOK, loading=False)
        assert resolve_page("/?tab=1", state, FACEBOOK_ONLY) == Page.WELCOME

    def test_admin_page_requires_admin_role(self) -> None:
        user = SessionState(user=VERIFIED, role=Role.USER, loading=False)
        admin = SessionState(user=VERIFIED, role=Role.ADMIN, loading=False)
        assert resolve_page("/admin", user) == Page.NOT_FOUND
        assert resolve_page("/admin", admin) == Page.ADMIN

    def test_unknown_path_is_not_found(self) -> None:
        state = SessionState(user=VERIFIED, loading=False)
        assert resolve_page("/nope", state) == Page.NOT_FOUND
        assert resolve_page("/settings", state) == Page.SETTINGS

    def test_default_policy_follows_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a policy argument the configured exempt providers apply."""
        state = SessionState(user=FACEBOOK, loading=False)
        monkeypatch.setattr(
            "authdemo.pages.routing.get_settings", lambda: Settings(_env_file=None)
        )
        assert resolve_page("/", state) == Page.WELCOME
        monkeypatch.setattr(
            "authdemo.pages.routing.get_settings",
            lambda: Settings(_env_file=None, verification_exempt_providers=""),
        )
        assert resolve_page("/", state) == Page.VERIFY_EMAIL
