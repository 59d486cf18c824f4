"""Application services."""

from authdemo.application.services.account_service import AccountService
from authdemo.application.services.admin_service import AdminService
from authdemo.application.services.profile_service import ProfileService
from authdemo.application.services.session_service import SessionContext
from authdemo.application.services.user_directory_service import UserDirectoryService

__all__ = [
    "AccountService",
    "AdminService",
    "ProfileService",
    "SessionContext",
    "UserDirectoryService",
]
