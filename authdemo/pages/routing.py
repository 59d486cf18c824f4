"""Page selection for the client router.

Given the path and the session, decide which page to render. Privacy and
data-deletion pages are reachable without signing in; everything else
waits for the session, then requires a signed-in user who has satisfied
the email verification policy.
"""

from __future__ import annotations

from enum import Enum

from authdemo.application.dtos.session import SessionState
from authdemo.core.config import get_settings
from authdemo.domain.enums import Role
from authdemo.domain.verification import EmailVerificationPolicy


class Page(str, Enum):
    NONE = "none"
    LANDING = "landing"
    VERIFY_EMAIL = "verify_email"
    WELCOME = "welcome"
    ADMIN = "admin"
    PROFILE = "profile"
    SETTINGS = "settings"
    PRIVACY_POLICY = "privacy_policy"
    DATA_DELETION = "data_deletion"
    NOT_FOUND = "not_found"


PUBLIC_PAGES: dict[str, Page] = {
    "/privacy-policy": Page.PRIVACY_POLICY,
    "/data-deletion": Page.DATA_DELETION,
}

_MEMBER_PAGES: dict[str, Page] = {
    "/": Page.WELCOME,
    "/welcome": Page.WELCOME,
    "/profile": Page.PROFILE,
    "/settings": Page.SETTINGS,
}


def _normalize(path: str) -> str:
    path = (path or "/").split("?", 1)[0].split("#", 1)[0]
    return path.rstrip("/") or "/"


def resolve_page(
    path: str,
    state: SessionState,
    policy: EmailVerificationPolicy | None = None,
) -> Page:
    """Return the page to render for path under the given session state.

    Without an explicit policy, exempt providers come from the settings.
    """
    path = _normalize(path)
    if path in PUBLIC_PAGES:
        return PUBLIC_PAGES[path]
    if state.loading:
        return Page.NONE
    if state.user is None:
        return Page.LANDING
    if policy is None:
        policy = EmailVerificationPolicy.from_providers(get_settings().exempt_providers)
    if not policy.is_satisfied(state.user):
        return Page.VERIFY_EMAIL
    if path == "/admin":
        return Page.ADMIN if state.role == Role.ADMIN else Page.NOT_FOUND
    return _MEMBER_PAGES.get(path, Page.NOT_FOUND)
