"""
Application services.

Use case orchestrators sitting between the API layer and persistence.
"""

from backend.application.services.token_service import IssuedToken, TokenService
from backend.application.services.user_service import UserService

__all__ = [
    "IssuedToken",
    "TokenService",
    "UserService",
]
