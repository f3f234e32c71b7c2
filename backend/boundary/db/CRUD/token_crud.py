"""
Personal access token CRUD operations.

Dependencies: sqlalchemy, backend.boundary.db.models.personal_access_token_model
System role: API token persistence operations
"""

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.models.personal_access_token_model import PersonalAccessToken


class TokenCRUD(BaseCRUD[PersonalAccessToken]):
    """CRUD operations for PersonalAccessToken."""

    def __init__(self) -> None:
        super().__init__(PersonalAccessToken)

    async def get_by_digest(
        self,
        session: AsyncSession,
        digest: str,
    ) -> PersonalAccessToken | None:
        """Retrieve a token by the sha256 digest of its secret."""
        stmt = select(PersonalAccessToken).where(PersonalAccessToken.token == digest)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_user(
        self,
        session: AsyncSession,
        user_id: int,
    ) -> Sequence[PersonalAccessToken]:
        """All tokens owned by a user, oldest first."""
        stmt = (
            select(PersonalAccessToken)
            .where(PersonalAccessToken.user_id == user_id)
            .order_by(PersonalAccessToken.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_for_user(self, session: AsyncSession, user_id: int) -> int:
        """Delete every token of a user; returns the number removed."""
        stmt = delete(PersonalAccessToken).where(PersonalAccessToken.user_id == user_id)
        result = await session.execute(stmt)
        return result.rowcount


token_crud = TokenCRUD()
