"""Account self-service: sign-up, sign-in, password and display-name changes, account deletion."""

from __future__ import annotations

import logging

from email_validator import EmailNotValidError, validate_email

from authdemo.application.interfaces.repositories import IRoleStore
from authdemo.application.interfaces.services import ICredentialService
from authdemo.domain.entities.identity import AuthIdentity
from authdemo.domain.enums import Role
from authdemo.domain.exceptions import (
    AuthDemoException,
    AuthenticationException,
    PartialFailureException,
    ValidationException,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
MAX_DISPLAY_NAME_LENGTH = 100
DEFAULT_DISPLAY_NAME = "User"


def normalize_email(email: str | None) -> str:
    """Return the normalized address or raise ValidationException."""
    if not email or not email.strip():
        raise ValidationException("Email is required", field="email")
    try:
        return validate_email(email.strip(), check_deliverability=False).normalized
    except EmailNotValidError as e:
        raise ValidationException("Please enter a valid email address", field="email") from e


def check_password(password: str | None, field: str = "password") -> str:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationException(
            f"Password should be at least {MIN_PASSWORD_LENGTH} characters", field=field
        )
    return password


def fallback_display_name(identity: AuthIdentity) -> str:
    """Provider display name, else the email's local part, else "User"."""
    if identity.display_name and identity.display_name.strip():
        return identity.display_name.strip()
    if identity.email:
        return identity.email.split("@", 1)[0]
    return DEFAULT_DISPLAY_NAME


class AccountService:
    """The signed-in user's own account operations."""

    def __init__(self, credentials: ICredentialService, role_store: IRoleStore) -> None:
        self._credentials = credentials
        self._role_store = role_store

    def _require_user(self) -> AuthIdentity:
        user = self._credentials.current_user
        if user is None:
            raise AuthenticationException()
        return user

    async def _ensure_role_record(self, user_id: str) -> None:
        """Create a ``user`` record when none exists; never overwrites an existing role."""
        if await self._role_store.get_record(user_id) is None:
            await self._role_store.set_role(user_id, Role.USER, None)
            logger.info("Created role record for %s", user_id)

    async def sign_up(
        self, email: str, password: str, display_name: str | None = None
    ) -> AuthIdentity:
        """Create the account, its role record and display name, then send the verification email."""
        address = normalize_email(email)
        check_password(password)
        identity = await self._credentials.sign_up(address, password)
        await self._ensure_role_record(identity.id)
        name = (display_name or "").strip()
        if name:
            identity = await self._credentials.update_profile(name[:MAX_DISPLAY_NAME_LENGTH])
        await self._credentials.send_verification_email()
        return identity

    async def sign_in(self, email: str, password: str) -> AuthIdentity:
        address = normalize_email(email)
        if not password:
            raise ValidationException("Password is required", field="password")
        return await self._credentials.sign_in(address, password)

    async def sign_in_with_provider(self, provider_id: str, credential: str) -> AuthIdentity:
        """Sign in with Google or Facebook. A returning admin keeps their role."""
        if not credential:
            raise ValidationException("Provider credential is required", field="credential")
        identity = await self._credentials.sign_in_with_provider(provider_id, credential)
        name = fallback_display_name(identity)
        if identity.display_name != name:
            identity = await self._credentials.update_profile(name)
        await self._ensure_role_record(identity.id)
        return identity

    async def sign_out(self) -> None:
        await self._credentials.sign_out()

    async def send_verification_email(self) -> None:
        self._require_user()
        await self._credentials.send_verification_email()

    async def reset_password(self, email: str) -> None:
        await self._credentials.reset_password(normalize_email(email))

    async def change_password(self, current_password: str, new_password: str) -> None:
        """Re-authenticate with the current password, then set the new one."""
        self._require_user()
        if not current_password:
            raise ValidationException("Current password is required", field="current_password")
        check_password(new_password, field="new_password")
        await self._credentials.update_password(current_password, new_password)

    async def update_display_name(self, display_name: str) -> AuthIdentity:
        self._require_user()
        name = (display_name or "").strip()
        if not name:
            raise ValidationException("Display name is required", field="display_name")
        if len(name) > MAX_DISPLAY_NAME_LENGTH:
            raise ValidationException(
                f"Display name must be at most {MAX_DISPLAY_NAME_LENGTH} characters",
                field="display_name",
            )
        return await self._credentials.update_profile(name)

    async def delete_account(self) -> None:
        """Delete the own role record, then the identity."""
        user = self._require_user()
        await self._role_store.delete_role(user.id)
        try:
            await self._credentials.delete_user()
        except Exception as e:
            cause = e.message if isinstance(e, AuthDemoException) else str(e)
            logger.error("Account deletion for %s failed after role removal: %s", user.id, cause)
            raise PartialFailureException(
                f"Role record deleted but account was not deleted: {cause}",
                target_id=user.id,
                completed_step="role_deleted",
                failed_step="account_delete",
                cause=cause,
            ) from e
        logger.info("User %s deleted their account", user.id)
