"""
API token schemas.

Request/response schemas for issuing personal access tokens.

Dependencies: pydantic
System role: Token API contracts
"""

from pydantic import BaseModel, Field


class CreateTokenRequest(BaseModel):
    """Request schema for exchanging credentials for a token."""

    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1)
    device_name: str = Field(min_length=1, max_length=255)
    abilities: list[str] = Field(default_factory=lambda: ["*"])


class TokenResponse(BaseModel):
    """Plain-text token, returned once at issue time."""

    token: str
    token_type: str = "Bearer"
    abilities: list[str]
