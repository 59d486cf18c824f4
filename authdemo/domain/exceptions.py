"""Domain exceptions for authdemo.

Each failure class of the admin and account flows gets its own exception
and error code, so the message shown to the user tells validation,
authorization, downstream and partial failures apart. The presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class AuthDemoException(Exception):
    """Base exception for all authdemo errors.

    Attributes:
        message: Human-readable error description (safe to show to users).
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, user_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body: error code, message and details."""
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(AuthDemoException):
    """Raised when input validation fails (missing user id, weak password, bad email)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(AuthDemoException):
    """Raised when the caller is not signed in or the token is missing, invalid or expired."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(AuthDemoException):
    """Raised when the caller is signed in but lacks the role for the operation."""

    def __init__(
        self,
        message: str = "Permission denied",
        required_role: str | None = None,
    ) -> None:
        details = {"required_role": required_role} if required_role else {}
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(AuthDemoException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class IdentityServiceException(AuthDemoException):
    """Raised when the identity service rejects a request (e.g. EMAIL_EXISTS).

    ``code`` is the service's own error code; ``message`` is the
    user-facing text from application.error_messages.
    """

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        super().__init__(message, "IDENTITY_SERVICE_ERROR", {"code": code})


class DownstreamUnavailableException(AuthDemoException):
    """Raised on network failure or a 5xx from the identity service, Firestore or the proxy."""

    def __init__(self, service: str, reason: str | None = None) -> None:
        message = f"{service} is unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, "SERVICE_UNAVAILABLE", {"service": service})


class ServiceNotConfiguredException(AuthDemoException):
    """Raised when privileged credentials are missing on the server."""

    def __init__(self, component: str = "Privileged identity access") -> None:
        super().__init__(
            f"{component} is not configured on this server",
            "SERVICE_UNAVAILABLE",
            {"component": component},
        )


class PartialFailureException(AuthDemoException):
    """Raised when the first write of a two-step admin operation succeeded and the second did not.

    The two stores are left divergent; the message names what was and was
    not done so the admin can reconcile by hand.
    """

    def __init__(
        self,
        message: str,
        target_id: str,
        completed_step: str,
        failed_step: str,
        cause: str | None = None,
    ) -> None:
        details: dict[str, Any] = {
            "target_id": target_id,
            "completed_step": completed_step,
            "failed_step": failed_step,
        }
        if cause:
            details["cause"] = cause
        super().__init__(message, "PARTIAL_FAILURE", details)
