"""DTOs for profile photo uploads."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PhotoFile:
    """A photo picked for upload (metadata only; bytes stay with the caller)."""

    name: str
    content_type: str
    size: int


@dataclass(frozen=True)
class PlannedUpload:
    file: PhotoFile
    object_path: str


@dataclass(frozen=True)
class PhotoUploadPlan:
    """Where each picked photo goes and which one becomes the primary photo."""

    folder: str
    uploads: tuple[PlannedUpload, ...]
    primary_photo: str

    @property
    def file_names(self) -> list[str]:
        return [u.object_path.rsplit("/", 1)[-1] for u in self.uploads]
