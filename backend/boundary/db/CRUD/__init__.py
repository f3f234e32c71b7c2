"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from backend.boundary.db.CRUD import user_crud, token_crud

    user = await user_crud.get_by_email(db, "taylor@example.com")
"""

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from backend.boundary.db.CRUD.token_crud import TokenCRUD, token_crud

__all__ = [
    "BaseCRUD",
    "UserCRUD",
    "user_crud",
    "TokenCRUD",
    "token_crud",
]
