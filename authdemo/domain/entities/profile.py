"""ProfileDocument: free-form per-user profile and settings fields."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LANGUAGE = "English"


@dataclass(frozen=True)
class ProfileDocument:
    """Profile page fields (bio, interests, ...) and settings page fields (display name, ...).

    ``photo_folder`` is the storage folder holding all of the user's photos
    and ``primary_photo`` the file name of the main one inside it.
    """

    bio: str = ""
    interests: str = ""
    looking_for: str = ""
    gender: str = ""
    display_name: str = ""
    birthdate: str = ""
    location: str = ""
    language: str = DEFAULT_LANGUAGE
    photo_folder: str = ""
    primary_photo: str = ""
