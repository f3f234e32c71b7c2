"""
Application configuration settings.

Identity of the running application: name, environment, public URL and
version. The URL also decides which Host headers are trusted.

Dependencies: pydantic, pydantic_settings
System role: Application-level configuration
"""

from urllib.parse import urlsplit

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from backend.configs.base import BaseSettings


class AppSettings(BaseSettings):
    """Application identity and runtime flags."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="APP_",
        case_sensitive=False,
        extra="ignore",
    )

    name: str = Field(default="Webapp", description="Application display name")
    env: str = Field(
        default="production",
        description="Application environment (local, testing, staging, production)",
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    url: str = Field(default="http://localhost", description="Public application URL")
    version: str = Field(default="1.0.0", description="Deployed application version")
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    trusted_hosts: list[str] = Field(
        default_factory=list,
        description="Extra Host header patterns accepted besides the APP_URL host",
    )

    @property
    def host(self) -> str:
        """Hostname part of the application URL (no port)."""
        return urlsplit(self.url).hostname or "localhost"
