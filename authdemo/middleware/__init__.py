"""ASGI middleware."""

from authdemo.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
