"""User-facing messages for identity service error codes.

Identity Toolkit answers errors as ``{"error": {"message": "CODE"}}`` or
``"CODE : detail"``. Unknown codes fall back to the service's own text.
"""

from __future__ import annotations

SESSION_EXPIRED_MESSAGE = "Your session has expired. Please sign in again."
GENERIC_MESSAGE = "An error occurred. Please try again"

_MESSAGES: dict[str, str] = {
    "INVALID_LOGIN_CREDENTIALS": "Incorrect email or password",
    "INVALID_PASSWORD": "Incorrect email or password",
    "INVALID_IDP_RESPONSE": "Incorrect email or password",
    "EMAIL_EXISTS": "An account with this email already exists",
    "WEAK_PASSWORD": "Password should be at least 6 characters",
    "INVALID_EMAIL": "Please enter a valid email address",
    "MISSING_EMAIL": "Please enter a valid email address",
    "EMAIL_NOT_FOUND": "No account found with this email",
    "USER_NOT_FOUND": "No account found with this email",
    "CREDENTIAL_TOO_OLD_LOGIN_AGAIN": "Please log in again before updating your profile",
    "REQUIRES_RECENT_LOGIN": "Please log in again before updating your profile",
    "FEDERATED_USER_ID_ALREADY_LINKED": (
        "An account already exists with the same email address but different "
        "sign-in credentials. Sign in using a provider associated with this email address."
    ),
    "USER_DISABLED": "This account has been disabled. Contact an administrator.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts. Please try again later",
    "TOKEN_EXPIRED": SESSION_EXPIRED_MESSAGE,
    "INVALID_ID_TOKEN": SESSION_EXPIRED_MESSAGE,
    "INVALID_REFRESH_TOKEN": SESSION_EXPIRED_MESSAGE,
    "USER_TOKEN_EXPIRED": SESSION_EXPIRED_MESSAGE,
    "OPERATION_NOT_ALLOWED": "This sign-in method is not enabled",
}

# Codes meaning the caller's session is no longer usable.
SESSION_CODES = frozenset(
    {"TOKEN_EXPIRED", "INVALID_ID_TOKEN", "INVALID_REFRESH_TOKEN", "USER_TOKEN_EXPIRED"}
)


def split_error_code(raw: str) -> tuple[str, str | None]:
    """Split ``"WEAK_PASSWORD : Password should be..."`` into code and detail."""
    code, sep, detail = raw.partition(":")
    return code.strip(), (detail.strip() or None) if sep else None


def get_error_message(code: str, fallback: str | None = None) -> str:
    """Return the user-facing message for an identity service error code."""
    if code in _MESSAGES:
        return _MESSAGES[code]
    return fallback or GENERIC_MESSAGE
