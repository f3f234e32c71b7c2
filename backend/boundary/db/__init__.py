"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, IntegerIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - User, PersonalAccessToken: Core domain entities
  - user_crud, token_crud: CRUD operation singletons

Dependencies: sqlalchemy, backend.configs
System role: Database adapter providing persistent storage for users and
their API tokens.
"""

from backend.boundary.db.base import Base, IntegerIDMixin, TimestampMixin
from backend.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from backend.boundary.db.models import PersonalAccessToken, User
from backend.boundary.db.CRUD import (
    BaseCRUD,
    TokenCRUD,
    UserCRUD,
    token_crud,
    user_crud,
)

__all__ = [
    # Base classes
    "Base",
    "IntegerIDMixin",
    "TimestampMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "User",
    "PersonalAccessToken",
    # CRUD classes
    "BaseCRUD",
    "UserCRUD",
    "TokenCRUD",
    # CRUD singletons
    "user_crud",
    "token_crud",
]
