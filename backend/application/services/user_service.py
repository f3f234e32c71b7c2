"""
User service orchestrator.

Coordinates user registration.

Dependencies: backend.boundary.db.CRUD
System role: User use case orchestration
"""

from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.base import utcnow
from backend.boundary.db.CRUD.user_crud import user_crud
from backend.boundary.db.models import User
from backend.core.exceptions import DuplicateEmailError, ValidationError


class UserService:
    """User service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize user service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        verified: bool = False,
    ) -> User:
        """
        Create a user account.

        Args:
            name: Display name
            email: Unique email address
            password: Plain-text password (hashed by the model)
            verified: Mark the email as verified now

        Raises:
            ValidationError: Empty name, email or password
            DuplicateEmailError: Email already registered
        """
        for field, value in (("name", name), ("email", email), ("password", password)):
            if not value:
                raise ValidationError(f"The {field} field is required.", field=field)

        if await user_crud.get_by_email(self.db, email) is not None:
            raise DuplicateEmailError(email)

        user = await user_crud.create(self.db, name=name, email=email, password=password)
        if verified:
            user.email_verified_at = utcnow()
        await self.db.commit()
        return user
