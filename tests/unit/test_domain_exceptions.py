"""Tests for domain exceptions (error_code, message, error, details)."""

from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BadRequestException,
    CascadeException,
    ConfigurationException,
    DuplicateEmailException,
    InvalidArgumentException,
    LoginFailedException,
    PersistenceException,
    ResourceNotFoundException,
    SigningException,
    UserAlreadyExistsException,
    ValidationException,
)


def test_cascade_exception_defaults() -> None:
    """Base exception uses the class name as error_code and message as error."""
    exc = CascadeException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "CascadeException"
    assert exc.error == "Something failed"
    assert exc.details == {}


def test_to_dict_builds_error_envelope() -> None:
    exc = CascadeException("Oops", error_code="CUSTOM", details={"k": "v"}, error="raw")
    assert exc.to_dict() == {
        "status": "error",
        "message": "Oops",
        "error": "raw",
        "code": "CUSTOM",
        "details": {"k": "v"},
    }


def test_validation_exception_field_in_details() -> None:
    exc = ValidationException("Invalid format", field="email")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "email"}
    assert ValidationException("Invalid").details == {}


def test_invalid_argument_default_message() -> None:
    exc = InvalidArgumentException()
    assert exc.error_code == "INVALID_ARGUMENT"
    assert exc.message == "One of the arguments is missing."


def test_bad_request_keeps_error_detail() -> None:
    exc = BadRequestException(error="The authorization header is missing.")
    assert exc.error_code == "BAD_REQUEST"
    assert exc.error == "The authorization header is missing."


def test_authentication_and_authorization_codes() -> None:
    assert AuthenticationException().error_code == "AUTHENTICATION_ERROR"
    assert AuthenticationException().message == "Unauthorized access. Authentication failed."
    exc = AuthorizationException(error="Insufficient permissions.", message="Access denied.")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.message == "Access denied."
    assert exc.error == "Insufficient permissions."


def test_login_failed_message_is_generic() -> None:
    exc = LoginFailedException("Password is wrong.")
    assert exc.message == "Login failed. Check your credentials again."
    assert exc.error == "Password is wrong."


def test_user_already_exists() -> None:
    exc = UserAlreadyExistsException()
    assert exc.error_code == "USER_ALREADY_EXISTS"
    assert exc.message == "Registration failed."
    assert exc.error == "User already exists."


def test_duplicate_email() -> None:
    assert DuplicateEmailException().error_code == "DUPLICATE_EMAIL"


def test_resource_not_found_default_and_custom_message() -> None:
    exc = ResourceNotFoundException("Company", "c1", error="Invalid company ID.")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.message == "Company not found."
    assert exc.details == {"resource_type": "Company", "resource_id": "c1"}
    custom = ResourceNotFoundException("Image", message="Image not found.")
    assert custom.message == "Image not found."
    assert custom.details == {"resource_type": "Image"}


def test_server_side_exceptions() -> None:
    assert PersistenceException("Saving refresh token has failed.").error_code == (
        "PERSISTENCE_ERROR"
    )
    config = ConfigurationException("ACCESS_TOKEN_EXPIRE_SECONDS")
    assert config.error_code == "CONFIGURATION_ERROR"
    assert config.details == {"setting": "ACCESS_TOKEN_EXPIRE_SECONDS"}
    signing = SigningException("bad key")
    assert signing.error_code == "SIGNING_ERROR"
    assert "bad key" in signing.message
