"""
Authentication configuration settings.

Password hashing cost, API token lifetime and guest redirect behaviour.

Dependencies: pydantic, pydantic_settings
System role: Authentication configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from backend.configs.base import BaseSettings


class AuthSettings(BaseSettings):
    """Password hashing and API token configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
    )

    bcrypt_rounds: int = Field(
        default=12,
        ge=4,
        le=31,
        description="bcrypt cost factor used for password hashes",
    )
    token_expiration_minutes: int | None = Field(
        default=None,
        description="Lifetime of API tokens in minutes (None = never expire)",
    )
    home_path: str = Field(
        default="/",
        description="Where authenticated users are sent when they hit a guest page",
    )
    guest_paths: list[str] = Field(
        default_factory=lambda: ["/login", "/register"],
        description="Paths only unauthenticated visitors may access",
    )
