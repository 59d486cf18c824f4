"""Tests for domain exceptions (error_code, message, details)."""

from authdemo.domain.exceptions import (
    AuthDemoException,
    AuthenticationException,
    AuthorizationException,
    DownstreamUnavailableException,
    IdentityServiceException,
    PartialFailureException,
    ResourceNotFoundException,
    ServiceNotConfiguredException,
    ValidationException,
)


def test_authdemo_exception_default_error_code() -> None:
    """Base AuthDemoException uses class name as error_code when not provided."""
    exc = AuthDemoException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "AuthDemoException"
    assert exc.details == {}
    assert exc.to_dict() == {"error": "AuthDemoException", "message": "Something failed"}


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("User ID is required", field="userId")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.to_dict() == {
        "error": "VALIDATION_ERROR",
        "message": "User ID is required",
        "details": {"field": "userId"},
    }


def test_authentication_exception_default_message() -> None:
    exc = AuthenticationException()
    assert exc.message == "Authentication required"
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_authorization_exception_required_role() -> None:
    exc = AuthorizationException("Only administrators can manage users", required_role="admin")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.details == {"required_role": "admin"}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("user", "u1")
    assert exc.message == "user not found: u1"
    assert exc.details == {"resource_type": "user", "resource_id": "u1"}


def test_identity_service_exception_keeps_service_code() -> None:
    exc = IdentityServiceException("EMAIL_EXISTS", "An account with this email already exists")
    assert exc.code == "EMAIL_EXISTS"
    assert exc.error_code == "IDENTITY_SERVICE_ERROR"
    assert exc.details == {"code": "EMAIL_EXISTS"}


def test_downstream_and_not_configured_share_status_code() -> None:
    """Both map to SERVICE_UNAVAILABLE; only the latter names a component."""
    down = DownstreamUnavailableException("Firestore", "HTTP 503")
    assert down.message == "Firestore is unavailable: HTTP 503"
    assert down.error_code == "SERVICE_UNAVAILABLE"
    missing = ServiceNotConfiguredException()
    assert missing.error_code == "SERVICE_UNAVAILABLE"
    assert missing.details == {"component": "Privileged identity access"}


def test_partial_failure_exception_names_both_steps() -> None:
    exc = PartialFailureException(
        "Role updated to disabled but account was not disabled: boom",
        target_id="u1",
        completed_step="role_disabled",
        failed_step="account_disable",
        cause="boom",
    )
    assert exc.error_code == "PARTIAL_FAILURE"
    assert exc.details == {
        "target_id": "u1",
        "completed_step": "role_disabled",
        "failed_step": "account_disable",
        "cause": "boom",
    }
