"""Admin orchestration: role changes plus the matching identity change via the proxy.

Every operation re-reads the caller's own role record at call time and
requires ``admin``. Two-step operations are not atomic: when the second
step fails after the first succeeded, PartialFailureException names both
steps and nothing is rolled back.
"""

from __future__ import annotations

import logging

from authdemo.application.dtos.admin import AdminActionResult
from authdemo.application.interfaces.repositories import IRoleStore
from authdemo.application.interfaces.services import IAdminProxy
from authdemo.application.services.session_service import SessionContext
from authdemo.domain.entities.role_record import RoleRecord
from authdemo.domain.enums import AdminAction, Role
from authdemo.domain.exceptions import (
    AuthDemoException,
    AuthenticationException,
    AuthorizationException,
    PartialFailureException,
    ValidationException,
)

logger = logging.getLogger(__name__)

MAX_USER_ID_LENGTH = 128


def validate_user_id(user_id: str | None, field: str = "userId") -> str:
    """Return the stripped id, or raise ValidationException for an empty or malformed one."""
    value = (user_id or "").strip()
    if not value:
        raise ValidationException("User ID is required", field=field)
    if len(value) > MAX_USER_ID_LENGTH or "/" in value:
        raise ValidationException("User ID is not valid", field=field)
    return value


def _cause(exc: Exception) -> str:
    return exc.message if isinstance(exc, AuthDemoException) else (str(exc) or type(exc).__name__)


class AdminService:
    """Admin console operations for the signed-in admin."""

    def __init__(
        self,
        role_store: IRoleStore,
        proxy: IAdminProxy,
        session: SessionContext,
    ) -> None:
        self._role_store = role_store
        self._proxy = proxy
        self._session = session

    async def _require_admin(self) -> str:
        """Return the caller's id; raise unless signed in with a current ``admin`` record."""
        caller = self._session.user
        if caller is None:
            raise AuthenticationException()
        role = await self._role_store.get_role(caller.id)
        if role != Role.ADMIN:
            logger.warning("Admin operation refused for %s (role %s)", caller.id, role.value)
            raise AuthorizationException(
                "Only administrators can manage users", required_role=Role.ADMIN.value
            )
        return caller.id

    async def set_role(
        self, target_id: str, new_role: Role | str, actor_id: str | None = None
    ) -> RoleRecord:
        """Overwrite the target's role (last write wins)."""
        caller_id = await self._require_admin()
        target = validate_user_id(target_id)
        role = new_role if isinstance(new_role, Role) else Role.parse(new_role)
        if role is None:
            raise ValidationException(
                f"Role must be one of: {', '.join(Role.values())}", field="role"
            )
        record = await self._role_store.set_role(target, role, actor_id or caller_id)
        logger.info("Admin %s set role of %s to %s", caller_id, target, role.value)
        return record

    async def disable_user(self, target_id: str) -> AdminActionResult:
        """Mark the role disabled, then disable the account. Disabling yourself signs you out.

        When the target is the caller the account is disabled first: the
        admin endpoint re-checks the caller's role record, so it must still
        read ``admin`` when the request arrives.
        """
        caller_id = await self._require_admin()
        target = validate_user_id(target_id)
        if target == caller_id:
            message = await self._proxy.disable_user(target)
            try:
                await self._role_store.set_role(target, Role.DISABLED, caller_id)
            except Exception as e:
                logger.error(
                    "Disable of %s succeeded but role update failed: %s", target, _cause(e)
                )
                raise PartialFailureException(
                    f"Account disabled but role was not updated: {_cause(e)}",
                    target_id=target,
                    completed_step="account_disable",
                    failed_step="role_disabled",
                    cause=_cause(e),
                ) from e
            logger.info("Admin %s disabled their own account", caller_id)
            await self._session.sign_out()
            return AdminActionResult(
                target, AdminAction.DISABLE, message or "User disabled successfully"
            )
        await self._role_store.set_role(target, Role.DISABLED, caller_id)
        try:
            message = await self._proxy.disable_user(target)
        except Exception as e:
            logger.error("Disable of %s failed after role update: %s", target, _cause(e))
            raise PartialFailureException(
                f"Role updated to disabled but account was not disabled: {_cause(e)}",
                target_id=target,
                completed_step="role_disabled",
                failed_step="account_disable",
                cause=_cause(e),
            ) from e
        logger.info("Admin %s disabled %s", caller_id, target)
        return AdminActionResult(target, AdminAction.DISABLE, message or "User disabled successfully")

    async def enable_user(self, target_id: str) -> AdminActionResult:
        """Enable the account, then restore role ``user``."""
        caller_id = await self._require_admin()
        target = validate_user_id(target_id)
        message = await self._proxy.enable_user(target)
        try:
            await self._role_store.set_role(target, Role.USER, caller_id)
        except Exception as e:
            logger.error("Enable of %s succeeded but role restore failed: %s", target, _cause(e))
            raise PartialFailureException(
                f"Account enabled but role was not restored: {_cause(e)}",
                target_id=target,
                completed_step="account_enable",
                failed_step="role_restore",
                cause=_cause(e),
            ) from e
        logger.info("Admin %s enabled %s", caller_id, target)
        return AdminActionResult(target, AdminAction.ENABLE, message or "User enabled successfully")

    async def delete_user(self, target_id: str) -> AdminActionResult:
        """Delete the role record, then the account. Repeating a delete succeeds.

        Deleting yourself removes the account first, for the same reason as
        in ``disable_user``, then signs you out.
        """
        caller_id = await self._require_admin()
        target = validate_user_id(target_id)
        if target == caller_id:
            message = await self._proxy.delete_user(target)
            try:
                await self._role_store.delete_role(target)
            except Exception as e:
                logger.error(
                    "Delete of %s succeeded but role removal failed: %s", target, _cause(e)
                )
                raise PartialFailureException(
                    f"Account deleted but role record was not deleted: {_cause(e)}",
                    target_id=target,
                    completed_step="account_delete",
                    failed_step="role_deleted",
                    cause=_cause(e),
                ) from e
            logger.info("Admin %s deleted their own account", caller_id)
            await self._session.sign_out()
            return AdminActionResult(
                target, AdminAction.DELETE, message or "User deleted successfully"
            )
        await self._role_store.delete_role(target)
        try:
            message = await self._proxy.delete_user(target)
        except Exception as e:
            logger.error("Delete of %s failed after role removal: %s", target, _cause(e))
            raise PartialFailureException(
                f"Role record deleted but account was not deleted: {_cause(e)}",
                target_id=target,
                completed_step="role_deleted",
                failed_step="account_delete",
                cause=_cause(e),
            ) from e
        logger.info("Admin %s deleted %s", caller_id, target)
        return AdminActionResult(target, AdminAction.DELETE, message or "User deleted successfully")

    async def list_users(self) -> list[RoleRecord]:
        """Every role record, for the admin console table."""
        await self._require_admin()
        return await self._role_store.list_all_roles()
