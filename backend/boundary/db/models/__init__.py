"""
Database models package.

Exports:
  - User: User ORM model
  - PersonalAccessToken: API token ORM model

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Database model definitions for domain entities
"""

from backend.boundary.db.models.user_model import User
from backend.boundary.db.models.personal_access_token_model import PersonalAccessToken

__all__ = [
    "User",
    "PersonalAccessToken",
]
