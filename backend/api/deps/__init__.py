"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_current_token,
    get_current_user,
    get_settings_dependency,
    get_token_service,
)

__all__ = [
    "get_current_token",
    "get_current_user",
    "get_settings_dependency",
    "get_token_service",
]
