"""
User API schemas.

Response schema for the authenticated user's profile. Hidden model
attributes (password, remember_token) are not part of the schema.

Dependencies: pydantic
System role: User API contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserResponse(BaseModel):
    """Public user profile."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    email_verified_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
