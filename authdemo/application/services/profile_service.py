"""Profile and settings pages: validation and field-level merges into the profile document."""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date, datetime

from authdemo.application.dtos.profile import PhotoFile, PhotoUploadPlan, PlannedUpload
from authdemo.application.interfaces.repositories import IProfileStore
from authdemo.domain.entities.profile import DEFAULT_LANGUAGE, ProfileDocument
from authdemo.domain.exceptions import ValidationException
from authdemo.shared.utils.datetime import epoch_millis, utc_now

MAX_PHOTOS_PER_UPLOAD = 5
MAX_PHOTO_BYTES = 2 * 1024 * 1024
ALLOWED_PHOTO_TYPES = frozenset({"image/jpeg", "image/png"})
SUPPORTED_LANGUAGES = ("English", "Spanish", "French", "German", "Japanese")
GENDERS = ("male", "female", "nonbinary", "other")
MIN_AGE_YEARS = 18
MAX_AGE_YEARS = 120
MAX_TEXT_LENGTH = 2000

_BIRTHDATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def photo_folder_for(user_id: str) -> str:
    return f"users/{user_id}/photos/"


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return day.replace(year=day.year - years, day=28)


def validate_birthdate(value: str, today: date | None = None) -> str:
    """Accept ``YYYY-MM-DD`` for someone between 18 and 120 years old; empty clears it."""
    if not value:
        return ""
    if not _BIRTHDATE_RE.match(value):
        raise ValidationException("Birthdate must be in YYYY-MM-DD format", field="birthdate")
    try:
        born = date.fromisoformat(value)
    except ValueError as e:
        raise ValidationException("Birthdate is not a valid date", field="birthdate") from e
    today = today or utc_now().date()
    if born > today:
        raise ValidationException("Birthdate cannot be in the future", field="birthdate")
    if born > _years_before(today, MIN_AGE_YEARS):
        raise ValidationException(
            f"You must be {MIN_AGE_YEARS} years or older", field="birthdate"
        )
    if born < _years_before(today, MAX_AGE_YEARS):
        raise ValidationException(
            f"Birthdate cannot be more than {MAX_AGE_YEARS} years ago", field="birthdate"
        )
    return value


def _text(value: str | None, field: str) -> str:
    text = (value or "").strip()
    if len(text) > MAX_TEXT_LENGTH:
        raise ValidationException(
            f"{field} must be at most {MAX_TEXT_LENGTH} characters", field=field
        )
    return text


class ProfileService:
    """Reads and merges the owner's profile document."""

    def __init__(self, profile_store: IProfileStore) -> None:
        self._store = profile_store

    async def get_profile(self, user_id: str) -> ProfileDocument:
        """Stored profile, or an empty one when the user has not saved anything yet."""
        return await self._store.get(user_id) or ProfileDocument()

    async def save_profile(
        self,
        user_id: str,
        *,
        bio: str = "",
        interests: str = "",
        looking_for: str = "",
        gender: str = "",
        photo_folder: str = "",
        primary_photo: str = "",
        photo_file_names: Sequence[str] = (),
    ) -> ProfileDocument:
        """Merge the profile page fields. Settings fields are left untouched.

        An empty primary photo defaults to the first of ``photo_file_names``.
        """
        if gender and gender not in GENDERS:
            raise ValidationException(
                f"Gender must be one of: {', '.join(GENDERS)}", field="gender"
            )
        folder = (photo_folder or "").strip()
        if folder and folder != photo_folder_for(user_id):
            raise ValidationException(
                "Photo folder must be the user's own folder", field="photo_folder"
            )
        primary = (primary_photo or "").strip()
        if not primary and photo_file_names:
            primary = photo_file_names[0]
        if "/" in primary:
            raise ValidationException("Primary photo must be a file name", field="primary_photo")
        return await self._store.merge(
            user_id,
            {
                "bio": _text(bio, "bio"),
                "interests": _text(interests, "interests"),
                "looking_for": _text(looking_for, "looking_for"),
                "gender": gender,
                "photo_folder": folder,
                "primary_photo": primary,
            },
        )

    async def update_settings(
        self,
        user_id: str,
        *,
        display_name: str = "",
        birthdate: str = "",
        location: str = "",
        language: str = DEFAULT_LANGUAGE,
        today: date | None = None,
    ) -> ProfileDocument:
        """Merge the settings page fields. Profile fields are left untouched."""
        if language not in SUPPORTED_LANGUAGES:
            raise ValidationException(
                f"Language must be one of: {', '.join(SUPPORTED_LANGUAGES)}", field="language"
            )
        return await self._store.merge(
            user_id,
            {
                "display_name": _text(display_name, "display_name"),
                "birthdate": validate_birthdate((birthdate or "").strip(), today),
                "location": _text(location, "location"),
                "language": language,
            },
        )

    def plan_photo_upload(
        self,
        user_id: str,
        files: Sequence[PhotoFile],
        existing_folder: str = "",
        primary_photo: str = "",
        now: datetime | None = None,
    ) -> PhotoUploadPlan:
        """Validate picked photos and name them ``<epoch-ms>-<name>`` inside the user's folder."""
        if not files:
            raise ValidationException("Select at least one photo", field="files")
        if len(files) > MAX_PHOTOS_PER_UPLOAD:
            raise ValidationException(
                f"You can upload up to {MAX_PHOTOS_PER_UPLOAD} photos only.", field="files"
            )
        for f in files:
            if f.content_type not in ALLOWED_PHOTO_TYPES:
                raise ValidationException("Only JPEG and PNG files are allowed.", field="files")
            if f.size > MAX_PHOTO_BYTES:
                raise ValidationException("Each file must be less than 2MB.", field="files")
        folder = existing_folder or photo_folder_for(user_id)
        stamp = epoch_millis(now or utc_now())
        uploads = tuple(
            PlannedUpload(file=f, object_path=f"{folder}{stamp}-{f.name.rsplit('/', 1)[-1]}")
            for f in files
        )
        primary = primary_photo or uploads[0].object_path.rsplit("/", 1)[-1]
        return PhotoUploadPlan(folder=folder, uploads=uploads, primary_photo=primary)
