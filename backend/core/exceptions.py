"""
Exception hierarchy for the application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(AppException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class DuplicateEmailError(ValidationError):
    """Raised when registering an email address that is already taken."""

    def __init__(self, email: str) -> None:
        super().__init__(
            "The email has already been taken.",
            field="email",
            details={"email": email},
        )


class AuthenticationError(AppException):
    """Base exception for authentication failures (HTTP 401)."""

    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when an email/password pair does not match a user."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("The provided credentials are incorrect.", details)


class InvalidTokenError(AuthenticationError):
    """Raised when an API token is unknown, malformed or expired."""

    def __init__(self, reason: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["reason"] = reason
        super().__init__("Invalid API token.", details)
