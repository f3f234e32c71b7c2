"""
Integration tests for UserCRUD and the generic BaseCRUD operations.

Runs against an in-memory SQLite database.

System role: Verification of user persistence
"""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from backend.boundary.db.models import User
from backend.core import hashing


async def create_user(session: AsyncSession, email: str = "taylor@example.com") -> User:
    return await user_crud.create(
        session,
        name="Taylor",
        email=email,
        password="secret",
    )


class TestUserCRUDInit:
    """Test suite for UserCRUD initialization."""

    def test_init_should_use_user_model(self) -> None:
        """Test UserCRUD initializes with User."""
        # Act
        crud = UserCRUD()

        # Assert
        assert crud.model is User


class TestUserCRUDCreate:
    """Test suite for UserCRUD.create()."""

    async def test_create_should_assign_id_and_timestamps(
        self, test_async_db: AsyncSession
    ) -> None:
        # Act
        user = await create_user(test_async_db)

        # Assert
        assert user.id is not None
        assert user.created_at is not None
        assert user.updated_at is not None
        assert user.email_verified_at is None

    async def test_create_should_hash_password(self, test_async_db: AsyncSession) -> None:
        user = await create_user(test_async_db)

        assert hashing.is_hashed(user.password)
        assert user.check_password("secret")

    async def test_create_should_drop_guarded_attributes(
        self, test_async_db: AsyncSession
    ) -> None:
        # Act
        user = await user_crud.create(
            test_async_db,
            name="Taylor",
            email="taylor@example.com",
            password="secret",
            remember_token="guarded",
        )

        # Assert
        assert user.remember_token is None

    async def test_create_should_enforce_unique_email(
        self, test_async_db: AsyncSession
    ) -> None:
        await create_user(test_async_db)

        with pytest.raises(IntegrityError):
            await create_user(test_async_db)


class TestUserCRUDRead:
    """Test suite for lookups."""

    async def test_get_by_email(self, test_async_db: AsyncSession) -> None:
        # Arrange
        created = await create_user(test_async_db)

        # Act
        found = await user_crud.get_by_email(test_async_db, "taylor@example.com")

        # Assert
        assert found is not None
        assert found.id == created.id

    async def test_get_by_email_returns_none_when_missing(
        self, test_async_db: AsyncSession
    ) -> None:
        assert await user_crud.get_by_email(test_async_db, "nobody@example.com") is None

    async def test_get_by_id_and_exists(self, test_async_db: AsyncSession) -> None:
        created = await create_user(test_async_db)

        assert (await user_crud.get_by_id(test_async_db, created.id)).email == created.email
        assert await user_crud.exists(test_async_db, created.id) is True
        assert await user_crud.exists(test_async_db, created.id + 100) is False

    async def test_get_all_paginates_in_id_order(self, test_async_db: AsyncSession) -> None:
        # Arrange
        for index in range(3):
            await create_user(test_async_db, email=f"user{index}@example.com")

        # Act
        page = await user_crud.get_all(test_async_db, limit=2, offset=1)

        # Assert
        assert [user.email for user in page] == [
            "user1@example.com",
            "user2@example.com",
        ]


class TestUserCRUDUpdateDelete:
    """Test suite for update_by_id() and delete_by_id()."""

    async def test_update_should_rehash_new_password(
        self, test_async_db: AsyncSession
    ) -> None:
        # Arrange
        user = await create_user(test_async_db)

        # Act
        updated = await user_crud.update_by_id(
            test_async_db, user.id, password="new-secret"
        )

        # Assert
        assert updated.check_password("new-secret")
        assert not updated.check_password("secret")

    async def test_update_missing_returns_none(self, test_async_db: AsyncSession) -> None:
        assert await user_crud.update_by_id(test_async_db, 999, name="x") is None

    async def test_delete_by_id(self, test_async_db: AsyncSession) -> None:
        user = await create_user(test_async_db)

        assert await user_crud.delete_by_id(test_async_db, user.id) is True
        assert await user_crud.delete_by_id(test_async_db, user.id) is False
