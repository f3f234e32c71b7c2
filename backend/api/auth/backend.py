"""
Bearer token authentication backend.

Resolves "Authorization: Bearer <id>|<secret>" headers to a user through
TokenService. Requests without a usable token stay anonymous; routes
that need a user enforce it with the get_current_user dependency.

Dependencies: starlette, backend.application.services
System role: Request authentication
"""

import logging

from starlette.authentication import (
    AuthCredentials,
    AuthenticationBackend,
    BaseUser,
)
from starlette.requests import HTTPConnection

from backend.application.services.token_service import TokenService
from backend.boundary.db.models import PersonalAccessToken, User

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


class AuthenticatedUser(BaseUser):
    """Starlette user wrapping the ORM user and the token it presented."""

    def __init__(self, user: User, access_token: PersonalAccessToken) -> None:
        self.user = user
        self.access_token = access_token

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def display_name(self) -> str:
        return self.user.name

    @property
    def identity(self) -> str:
        return str(self.user.id)


class TokenAuthBackend(AuthenticationBackend):
    """Authenticate requests carrying a personal access token."""

    async def authenticate(
        self, conn: HTTPConnection
    ) -> tuple[AuthCredentials, AuthenticatedUser] | None:
        header = conn.headers.get("Authorization", "")
        if not header.lower().startswith(BEARER_PREFIX):
            return None

        plain_text_token = header[len(BEARER_PREFIX):].strip()
        if not plain_text_token:
            return None

        SessionFactory = conn.app.state.session_factory
        settings = conn.app.state.settings
        async with SessionFactory() as session:
            result = await TokenService(session, settings.auth).authenticate(
                plain_text_token
            )

        if result is None:
            logger.info("Bearer token rejected", extra={"path": conn.url.path})
            return None

        user, access_token = result
        scopes = ["authenticated", *access_token.abilities]
        return AuthCredentials(scopes), AuthenticatedUser(user, access_token)
