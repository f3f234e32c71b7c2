"""
Core business logic module.

Contains the exception hierarchy, password hashing and API token
primitives. Nothing here touches the database or HTTP layer.
"""

from backend.core.exceptions import (
    AppException,
    AuthenticationError,
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidTokenError,
    ValidationError,
)

__all__ = [
    "AppException",
    "AuthenticationError",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "ValidationError",
]
