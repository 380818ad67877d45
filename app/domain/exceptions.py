"""Domain exceptions for the Cascade application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class CascadeException(Exception):
    """Base exception for all Cascade application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to the error envelope using message, error and error_code.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
        error: Raw detail string; defaults to message.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        error: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
            error: Optional raw detail string for the envelope's error field.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.error = error or message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the error envelope for this exception."""
        body: dict[str, Any] = {
            "status": "error",
            "message": self.message,
            "error": self.error,
            "code": self.error_code,
        }
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(CascadeException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidArgumentException(CascadeException):
    """Raised when a required argument to a core operation is missing."""

    def __init__(self, message: str = "One of the arguments is missing.") -> None:
        super().__init__(message, "INVALID_ARGUMENT")


class BadRequestException(CascadeException):
    """Raised for malformed requests (e.g. missing or non-Bearer Authorization header)."""

    def __init__(
        self,
        error: str,
        message: str = "Bad request. Please check your request again.",
    ) -> None:
        super().__init__(message, "BAD_REQUEST", error=error)


class AuthenticationException(CascadeException):
    """Raised when authentication fails (e.g. invalid signature or expired token)."""

    def __init__(
        self,
        error: str | None = None,
        message: str = "Unauthorized access. Authentication failed.",
    ) -> None:
        super().__init__(message, "AUTHENTICATION_ERROR", error=error)


class AuthorizationException(CascadeException):
    """Raised when the caller is authenticated but not allowed to act.

    Covers tokens missing required claims and insufficient hierarchy levels.
    """

    def __init__(
        self,
        error: str | None = None,
        message: str = "Forbidden access. Authorization failed.",
    ) -> None:
        super().__init__(message, "PERMISSION_DENIED", error=error)


class LoginFailedException(CascadeException):
    """Raised when login credentials do not match a user."""

    def __init__(self, error: str) -> None:
        super().__init__(
            "Login failed. Check your credentials again.",
            "LOGIN_FAILED",
            error=error,
        )


class UserAlreadyExistsException(CascadeException):
    """Raised when registering with an email that is already taken."""

    def __init__(self) -> None:
        super().__init__(
            "Registration failed.",
            "USER_ALREADY_EXISTS",
            error="User already exists.",
        )


class DuplicateEmailException(CascadeException):
    """Raised when updating a user to an email already registered."""

    def __init__(self) -> None:
        super().__init__(
            "Email is already registered.",
            "DUPLICATE_EMAIL",
            error="User with this email already exists.",
        )


class ResourceNotFoundException(CascadeException):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str | None = None,
        error: str | None = None,
        message: str | None = None,
    ) -> None:
        details = {"resource_type": resource_type}
        if resource_id is not None:
            details["resource_id"] = resource_id
        super().__init__(
            message or f"{resource_type} not found.",
            "RESOURCE_NOT_FOUND",
            details,
            error=error,
        )


class PersistenceException(CascadeException):
    """Raised when a write that must affect a record affects none."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "PERSISTENCE_ERROR")


class ConfigurationException(CascadeException):
    """Raised when a required setting (e.g. a token TTL) is absent."""

    def __init__(self, setting: str) -> None:
        super().__init__(
            f"Configuration error: {setting} is not set.",
            "CONFIGURATION_ERROR",
            {"setting": setting},
        )


class SigningException(CascadeException):
    """Raised when signing an access token fails."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Access token generation failed: {reason}.",
            "SIGNING_ERROR",
            {"reason": reason},
        )
