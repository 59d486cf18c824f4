"""Application DTOs."""

from authdemo.application.dtos.admin import AdminActionResult, ManagedUser
from authdemo.application.dtos.profile import PhotoFile, PhotoUploadPlan, PlannedUpload
from authdemo.application.dtos.session import SessionState

__all__ = [
    "AdminActionResult",
    "ManagedUser",
    "PhotoFile",
    "PhotoUploadPlan",
    "PlannedUpload",
    "SessionState",
]
