"""
User CRUD operations.

Provides Create, Read, Update, Delete operations for User with
email lookup and mass-assignment aware creation.

Dependencies: sqlalchemy, backend.boundary.db.models.user_model
System role: User persistence operations
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.models.user_model import User


class UserCRUD(BaseCRUD[User]):
    """CRUD operations for User."""

    def __init__(self) -> None:
        super().__init__(User)

    async def create(self, session: AsyncSession, **kwargs) -> User:
        """
        Create a user from mass-assignable attributes only.

        Attributes outside User.FILLABLE are dropped; use the returned
        instance to set guarded ones explicitly.
        """
        instance = User().fill(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_email(self, session: AsyncSession, email: str) -> User | None:
        """
        Retrieve a user by email address.

        Args:
            session: Async database session
            email: Exact email address

        Returns:
            User if found, None otherwise
        """
        stmt = select(User).where(User.email == email)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


user_crud = UserCRUD()
