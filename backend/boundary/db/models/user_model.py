"""
User ORM model.

Represents an account that can authenticate against the API.

Dependencies: sqlalchemy, backend.boundary.db.base, backend.core.hashing
System role: User persistence with password hashing and attribute hiding
"""

import json
from datetime import datetime
from typing import Any, ClassVar

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from backend.boundary.db.base import Base, IntegerIDMixin, TimestampMixin, as_utc
from backend.configs import get_settings
from backend.core import hashing


class User(Base, IntegerIDMixin, TimestampMixin):
    """
    User ORM model.

    Passwords are hashed on assignment: a plain-text value is run through
    bcrypt, a value that already is a bcrypt hash is stored unchanged.
    Serialization through to_dict()/to_json() never includes the HIDDEN
    attributes, and fill() only assigns FILLABLE ones.

    Attributes:
        id: Integer primary key
        name: Display name
        email: Unique email address
        email_verified_at: When the email was verified (None if never)
        password: bcrypt hash of the password
        remember_token: Opaque "remember me" token
        created_at: Row creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)

    Relationships:
        tokens: One-to-many with PersonalAccessToken (cascade delete)
    """

    __tablename__ = "users"

    FILLABLE: ClassVar[tuple[str, ...]] = ("name", "email", "password")
    HIDDEN: ClassVar[tuple[str, ...]] = ("password", "remember_token")

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )
    email_verified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    remember_token: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        default=None,
    )

    tokens = relationship(
        "PersonalAccessToken",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @validates("password")
    def _hash_password(self, key: str, value: str) -> str:
        if value is None or hashing.is_hashed(value):
            return value
        return hashing.make_hash(value, rounds=get_settings().auth.bcrypt_rounds)

    def fill(self, **attributes: Any) -> "User":
        """Assign mass-assignable attributes, silently dropping the rest."""
        for key, value in attributes.items():
            if key in self.FILLABLE:
                setattr(self, key, value)
        return self

    def check_password(self, plain: str) -> bool:
        """Verify a plain-text password against the stored hash."""
        return hashing.check_hash(plain, self.password)

    def to_dict(self) -> dict[str, Any]:
        """Column values without hidden attributes; datetimes as ISO-8601."""
        data: dict[str, Any] = {}
        for column in self.__table__.columns:
            if column.key in self.HIDDEN:
                continue
            value = getattr(self, column.key)
            if isinstance(value, datetime):
                value = as_utc(value).isoformat()
            data[column.key] = value
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
