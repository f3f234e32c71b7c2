"""Pydantic request/response schemas for the HTTP API."""

from backend.models.common import ErrorResponse
from backend.models.health import DatabaseHealthResponse, HealthResponse
from backend.models.token import CreateTokenRequest, TokenResponse
from backend.models.user import UserResponse

__all__ = [
    "ErrorResponse",
    "DatabaseHealthResponse",
    "HealthResponse",
    "CreateTokenRequest",
    "TokenResponse",
    "UserResponse",
]
