"""
API token service orchestrator.

Issues, authenticates and revokes personal access tokens.

Dependencies: backend.boundary.db.CRUD, backend.core.tokens, backend.configs
System role: Bearer token use case orchestration
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.base import utcnow
from backend.boundary.db.CRUD.token_crud import token_crud
from backend.boundary.db.CRUD.user_crud import user_crud
from backend.boundary.db.models import PersonalAccessToken, User
from backend.configs.auth import AuthSettings
from backend.core import hashing, tokens
from backend.core.exceptions import InvalidCredentialsError

logger = logging.getLogger(__name__)


@dataclass
class IssuedToken:
    """A freshly created token; plain_text_token is only available here."""

    access_token: PersonalAccessToken
    plain_text_token: str


class TokenService:
    """Personal access token service orchestrator."""

    def __init__(self, db: AsyncSession, settings: AuthSettings) -> None:
        """
        Initialize token service.

        Args:
            db: Async SQLAlchemy session
            settings: Authentication settings (token lifetime)
        """
        self.db = db
        self.settings = settings

    async def create_token(
        self,
        user: User,
        name: str,
        abilities: list[str] | None = None,
    ) -> IssuedToken:
        """
        Create a token for a user and commit it.

        Args:
            user: Token owner
            name: Token label
            abilities: Granted abilities (defaults to ["*"])

        Returns:
            IssuedToken: Persisted token plus its plain-text form
        """
        secret = tokens.generate_secret()
        access_token = await token_crud.create(
            self.db,
            user_id=user.id,
            name=name,
            token=tokens.digest(secret),
            abilities=["*"] if abilities is None else abilities,
        )
        await self.db.commit()
        logger.info(
            "Issued API token",
            extra={"user_id": user.id, "token_id": access_token.id},
        )
        return IssuedToken(
            access_token=access_token,
            plain_text_token=tokens.format_plain_token(access_token.id, secret),
        )

    async def issue(
        self,
        email: str,
        password: str,
        device_name: str,
        abilities: list[str] | None = None,
    ) -> IssuedToken:
        """
        Exchange email/password credentials for a new token.

        A password hashed with a different bcrypt cost is rehashed with
        the configured one.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        user = await user_crud.get_by_email(self.db, email)
        if user is None or not user.check_password(password):
            logger.warning("Rejected token request", extra={"email": email})
            raise InvalidCredentialsError()
        if hashing.needs_rehash(user.password, self.settings.bcrypt_rounds):
            # committed together with the new token
            user.password = hashing.make_hash(password, rounds=self.settings.bcrypt_rounds)
        return await self.create_token(user, device_name, abilities)

    async def authenticate(
        self,
        plain_text_token: str,
    ) -> tuple[User, PersonalAccessToken] | None:
        """
        Resolve a bearer token to its user.

        Returns None for unknown, mismatched or expired tokens and for
        tokens whose user no longer exists. On success last_used_at is
        refreshed.
        """
        token_id, secret = tokens.parse_plain_token(plain_text_token)
        if not secret:
            return None

        if token_id is None:
            access_token = await token_crud.get_by_digest(self.db, tokens.digest(secret))
        else:
            access_token = await token_crud.get_by_id(self.db, token_id)
            if access_token is not None and not tokens.digests_match(secret, access_token.token):
                access_token = None

        if access_token is None:
            return None

        now = utcnow()
        if access_token.is_expired(now, self.settings.token_expiration_minutes):
            logger.info("Expired API token used", extra={"token_id": access_token.id})
            return None

        user = await user_crud.get_by_id(self.db, access_token.user_id)
        if user is None:
            return None

        access_token.last_used_at = now
        await self.db.commit()
        return user, access_token

    async def revoke(self, token_id: int) -> bool:
        """Delete a token; returns False if it did not exist."""
        deleted = await token_crud.delete_by_id(self.db, token_id)
        await self.db.commit()
        return deleted

    async def revoke_all(self, user_id: int) -> int:
        """Delete every token of a user."""
        count = await token_crud.delete_for_user(self.db, user_id)
        await self.db.commit()
        return count
