"""Firestore collection names and document field names (schema-in-code).

Names match what the web client reads and writes, so documents created by
either side stay compatible.
"""

COLLECTION_USER_ROLES = "userRoles"
COLLECTION_USERS = "users"

# userRoles/{uid}
FIELD_ROLE = "role"
FIELD_UPDATED_AT = "updatedAt"
FIELD_UPDATED_BY = "updatedBy"

# users/{uid}: ProfileDocument attribute -> Firestore field
PROFILE_FIELDS: dict[str, str] = {
    "bio": "bio",
    "interests": "interests",
    "looking_for": "lookingFor",
    "gender": "gender",
    "display_name": "displayName",
    "birthdate": "birthdate",
    "location": "location",
    "language": "language",
    "photo_folder": "url",
    "primary_photo": "primaryPhoto",
}
