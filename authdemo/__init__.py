"""authdemo: Firebase Auth demo service with an admin console and role store."""

__version__ = "1.0.0"
