"""
Custom exception classes for the account management API.

This module defines a hierarchy of custom exceptions that map to HTTP status codes
and provide consistent error responses across the API.

Exception hierarchy:
    AppException (base)
    ├── BadRequestAlertError (400)
    │   ├── InvalidPasswordError
    │   ├── PasswordNotMatchError
    │   ├── EmailAlreadyUsedError
    │   ├── LoginAlreadyUsedError
    │   └── EmailNotFoundError
    ├── AuthenticationError (401)
    │   ├── InvalidCredentialsError
    │   └── UserNotActivatedError
    └── InternalServerError (500)
"""

from typing import Any


class AppException(Exception):
    """
    Base exception class for all application exceptions.

    All custom exceptions should inherit from this class to ensure
    consistent error handling and response formatting.

    Attributes:
        status_code: HTTP status code for the error
        error_code: Machine-readable error code
        message: Human-readable error message
        details: Optional additional error details
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for JSON response.

        Returns:
            Dictionary with error information
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# =============================================================================
# Bad Request Errors (400)
# =============================================================================


class BadRequestAlertError(AppException):
    """Base class for client errors rendered as 400 Bad Request."""

    def __init__(
        self,
        message: str,
        error_code: str = "BAD_REQUEST",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details,
        )


class InvalidPasswordError(BadRequestAlertError):
    """Raised when a password has an invalid length or does not match the stored one."""

    def __init__(
        self,
        message: str = "Incorrect password",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="INVALID_PASSWORD",
            details=details,
        )


class PasswordNotMatchError(BadRequestAlertError):
    """Raised when the password confirmation differs from the password."""

    def __init__(
        self,
        message: str = "Passwords do not match",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="PASSWORD_NOT_MATCH",
            details=details,
        )


class EmailAlreadyUsedError(BadRequestAlertError):
    """Raised when an email is already registered to another account."""

    def __init__(
        self,
        message: str = "Email is already in use!",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="EMAIL_EXISTS",
            details=details,
        )


class LoginAlreadyUsedError(BadRequestAlertError):
    """Raised when a login is already taken."""

    def __init__(
        self,
        message: str = "Login name already used!",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="LOGIN_EXISTS",
            details=details,
        )


class EmailNotFoundError(BadRequestAlertError):
    """Raised when no account is registered for an email address."""

    def __init__(
        self,
        message: str = "Email address not registered",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="EMAIL_NOT_FOUND",
            details=details,
        )


# =============================================================================
# Authentication Errors (401 Unauthorized)
# =============================================================================


class AuthenticationError(AppException):
    """Base class for authentication errors."""

    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: str = "AUTHENTICATION_FAILED",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code=error_code,
            details=details,
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials are invalid."""

    def __init__(
        self,
        message: str = "Invalid login or password",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="INVALID_CREDENTIALS",
            details=details,
        )


class UserNotActivatedError(AuthenticationError):
    """Raised when a user tries to authenticate before activating the account."""

    def __init__(
        self,
        message: str = "User was not activated",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="USER_NOT_ACTIVATED",
            details=details,
        )


# =============================================================================
# Internal Server Error (500)
# =============================================================================


class InternalServerError(AppException):
    """Raised when an operation cannot complete because expected state is missing."""

    def __init__(
        self,
        message: str = "Internal server error",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="INTERNAL_ERROR",
            details=details,
        )
