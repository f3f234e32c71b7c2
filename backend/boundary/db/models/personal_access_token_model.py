"""
Personal access token ORM model.

Bearer tokens issued to users for API authentication. Only the sha256
digest of the token secret is stored.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: API token persistence
"""

from datetime import datetime, timedelta

from sqlalchemy import JSON, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.boundary.db.base import Base, IntegerIDMixin, TimestampMixin, as_utc


class PersonalAccessToken(Base, IntegerIDMixin, TimestampMixin):
    """
    Personal access token ORM model.

    Attributes:
        id: Integer primary key (the "<id>" half of a plain-text token)
        user_id: Owning user
        name: Client-supplied label (e.g. device name)
        token: sha256 hex digest of the token secret
        abilities: Granted abilities; "*" grants everything
        last_used_at: Last successful authentication with this token
        expires_at: Absolute expiry (None = governed by configuration only)
    """

    __tablename__ = "personal_access_tokens"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    token: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    abilities: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=lambda: ["*"],
    )
    last_used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    user = relationship("User", back_populates="tokens")

    def can(self, ability: str) -> bool:
        """Whether the token grants the ability."""
        abilities = self.abilities or []
        return "*" in abilities or ability in abilities

    def cant(self, ability: str) -> bool:
        return not self.can(ability)

    def is_expired(self, now: datetime, expiration_minutes: int | None = None) -> bool:
        """
        Whether the token is no longer valid at `now`.

        Args:
            now: Aware UTC timestamp to evaluate against
            expiration_minutes: Configured lifetime measured from created_at
        """
        expires_at = as_utc(self.expires_at)
        if expires_at is not None and expires_at <= now:
            return True
        if expiration_minutes is not None and self.created_at is not None:
            created_at = as_utc(self.created_at)
            if created_at + timedelta(minutes=expiration_minutes) <= now:
                return True
        return False
