"""
Test suite for TokenService.

System role: Verification of token issuing, authentication and revocation
"""

from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from backend.application.services.token_service import TokenService
from backend.application.services.user_service import UserService
from backend.boundary.db.base import utcnow
from backend.boundary.db.CRUD.token_crud import token_crud
from backend.boundary.db.CRUD.user_crud import user_crud
from backend.boundary.db.models import User
from backend.configs.auth import AuthSettings
from backend.core import hashing, tokens
from backend.core.exceptions import InvalidCredentialsError


@pytest.fixture
def auth_settings() -> AuthSettings:
    return AuthSettings(bcrypt_rounds=4)


@pytest.fixture
def token_service(test_async_db: AsyncSession, auth_settings: AuthSettings) -> TokenService:
    return TokenService(test_async_db, auth_settings)


@pytest.fixture
async def user(test_async_db: AsyncSession) -> User:
    return await UserService(test_async_db).register(
        "Taylor", "taylor@example.com", "secret"
    )


class TestTokenServiceCreate:
    """Test suite for create_token() and issue()."""

    async def test_create_token_should_store_digest_only(
        self, token_service: TokenService, user: User
    ) -> None:
        # Act
        issued = await token_service.create_token(user, "laptop")

        # Assert
        token_id, secret = tokens.parse_plain_token(issued.plain_text_token)
        assert token_id == issued.access_token.id
        assert len(secret) == tokens.TOKEN_LENGTH
        assert issued.access_token.token == tokens.digest(secret)
        assert secret not in issued.access_token.token

    async def test_create_token_should_keep_abilities(
        self, token_service: TokenService, user: User
    ) -> None:
        issued = await token_service.create_token(user, "ci", ["deploy"])

        assert issued.access_token.abilities == ["deploy"]

    async def test_create_token_should_keep_empty_abilities(
        self, token_service: TokenService, user: User
    ) -> None:
        issued = await token_service.create_token(user, "ci", [])

        assert issued.access_token.abilities == []
        assert issued.access_token.cant("deploy")

    async def test_issue_should_accept_valid_credentials(
        self, token_service: TokenService, user: User
    ) -> None:
        issued = await token_service.issue("taylor@example.com", "secret", "laptop")

        assert issued.access_token.user_id == user.id
        assert issued.access_token.name == "laptop"

    @pytest.mark.parametrize(
        ("email", "password"),
        [("taylor@example.com", "wrong"), ("nobody@example.com", "secret")],
    )
    async def test_issue_should_reject_bad_credentials(
        self, token_service: TokenService, user: User, email, password
    ) -> None:
        with pytest.raises(InvalidCredentialsError):
            await token_service.issue(email, password, "laptop")

    async def test_issue_should_rehash_password_with_configured_rounds(
        self, token_service: TokenService, test_async_db: AsyncSession
    ) -> None:
        # Arrange
        user = await UserService(test_async_db).register(
            "Abigail", "abigail@example.com", hashing.make_hash("secret", rounds=5)
        )
        assert hashing.hash_rounds(user.password) == 5

        # Act
        await token_service.issue("abigail@example.com", "secret", "laptop")

        # Assert
        stored = await user_crud.get_by_email(test_async_db, "abigail@example.com")
        assert hashing.hash_rounds(stored.password) == 4
        assert stored.check_password("secret")

    async def test_issue_should_keep_hash_with_matching_rounds(
        self, token_service: TokenService, user: User
    ) -> None:
        original = user.password

        await token_service.issue("taylor@example.com", "secret", "laptop")

        assert user.password == original


class TestTokenServiceAuthenticate:
    """Test suite for authenticate()."""

    async def test_authenticate_should_resolve_user_and_touch_token(
        self, token_service: TokenService, user: User
    ) -> None:
        # Arrange
        issued = await token_service.create_token(user, "laptop")

        # Act
        result = await token_service.authenticate(issued.plain_text_token)

        # Assert
        assert result is not None
        found_user, access_token = result
        assert found_user.id == user.id
        assert access_token.id == issued.access_token.id
        assert access_token.last_used_at is not None

    async def test_authenticate_should_accept_secret_without_id(
        self, token_service: TokenService, user: User
    ) -> None:
        issued = await token_service.create_token(user, "laptop")
        _, secret = tokens.parse_plain_token(issued.plain_text_token)

        result = await token_service.authenticate(secret)

        assert result is not None
        assert result[0].id == user.id

    async def test_authenticate_should_reject_wrong_secret_for_id(
        self, token_service: TokenService, user: User
    ) -> None:
        issued = await token_service.create_token(user, "laptop")

        result = await token_service.authenticate(f"{issued.access_token.id}|not-the-secret")

        assert result is None

    @pytest.mark.parametrize("value", ["", "|", "999|whatever", "unknown-secret"])
    async def test_authenticate_should_reject_unknown_tokens(
        self, token_service: TokenService, user: User, value
    ) -> None:
        assert await token_service.authenticate(value) is None

    async def test_authenticate_should_reject_expired_token(
        self, test_async_db: AsyncSession, user: User
    ) -> None:
        # Arrange
        service = TokenService(
            test_async_db, AuthSettings(bcrypt_rounds=4, token_expiration_minutes=60)
        )
        issued = await service.create_token(user, "laptop")
        issued.access_token.created_at = utcnow() - timedelta(minutes=61)
        await test_async_db.commit()

        # Act
        result = await service.authenticate(issued.plain_text_token)

        # Assert
        assert result is None

    async def test_authenticate_should_reject_token_past_expires_at(
        self, token_service: TokenService, test_async_db: AsyncSession, user: User
    ) -> None:
        issued = await token_service.create_token(user, "laptop")
        issued.access_token.expires_at = utcnow() - timedelta(seconds=1)
        await test_async_db.commit()

        assert await token_service.authenticate(issued.plain_text_token) is None


class TestTokenServiceRevoke:
    """Test suite for revoke() and revoke_all()."""

    async def test_revoke_should_delete_token(
        self, token_service: TokenService, test_async_db: AsyncSession, user: User
    ) -> None:
        # Arrange
        issued = await token_service.create_token(user, "laptop")

        # Act
        deleted = await token_service.revoke(issued.access_token.id)

        # Assert
        assert deleted is True
        assert await token_crud.exists(test_async_db, issued.access_token.id) is False
        assert await token_service.revoke(issued.access_token.id) is False

    async def test_revoke_all_should_delete_every_user_token(
        self, token_service: TokenService, test_async_db: AsyncSession, user: User
    ) -> None:
        await token_service.create_token(user, "laptop")
        await token_service.create_token(user, "phone")

        assert await token_service.revoke_all(user.id) == 2
        assert await token_crud.get_for_user(test_async_db, user.id) == []

    async def test_revoked_token_no_longer_authenticates(
        self, token_service: TokenService, user: User
    ) -> None:
        issued = await token_service.create_token(user, "laptop")
        await token_service.revoke(issued.access_token.id)

        assert await token_service.authenticate(issued.plain_text_token) is None

    async def test_deleted_user_tokens_no_longer_authenticate(
        self, token_service: TokenService, test_async_db: AsyncSession, user: User
    ) -> None:
        issued = await token_service.create_token(user, "laptop")
        await user_crud.delete_by_id(test_async_db, user.id)
        await test_async_db.commit()

        assert await token_service.authenticate(issued.plain_text_token) is None
