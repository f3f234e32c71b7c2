"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: backend.configs, backend.application, backend.boundary
System role: DI container for service injection
"""

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.application.services import TokenService
from backend.boundary.db import get_async_db
from backend.boundary.db.models import PersonalAccessToken, User
from backend.configs import Settings


def get_settings_dependency(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_token_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> TokenService:
    """Get token service instance."""
    return TokenService(db, settings.auth)


def get_current_user(request: Request) -> User:
    """
    Require an authenticated request.

    Raises:
        HTTPException: 401 when no valid bearer token was presented
    """
    auth_user = request.scope.get("user")
    if auth_user is None or not auth_user.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthenticated.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth_user.user


def get_current_token(
    request: Request,
    _: User = Depends(get_current_user),
) -> PersonalAccessToken:
    """Access token used to authenticate the current request."""
    return request.scope["user"].access_token
