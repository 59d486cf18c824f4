"""Domain enumerations for authdemo."""

from enum import Enum


class Role(str, Enum):
    """Role stored in a user's RoleRecord.

    ``disabled`` mirrors the identity's disabled flag; it is written by the
    admin disable flow and cleared (back to ``user``) by the enable flow.
    """

    USER = "user"
    ADMIN = "admin"
    DISABLED = "disabled"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid role values as strings."""
        return [role.value for role in cls]

    @classmethod
    def parse(cls, value: object) -> "Role | None":
        """Return the Role for a stored value, or None when it is not a known role."""
        try:
            return cls(value)
        except ValueError:
            return None


class ProviderId(str, Enum):
    """Sign-in provider ids as reported by Firebase Auth."""

    PASSWORD = "password"
    GOOGLE = "google.com"
    FACEBOOK = "facebook.com"


class AdminAction(str, Enum):
    """Privileged actions performed through the admin proxy."""

    SET_ROLE = "set_role"
    DISABLE = "disable"
    ENABLE = "enable"
    DELETE = "delete"
