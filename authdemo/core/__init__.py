"""Core: configuration, logging, rate limiting, lifespan and exception handlers."""

from authdemo.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
