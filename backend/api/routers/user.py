"""
Authenticated user API endpoint.

Routes: GET /user

Dependencies: backend.api.deps, backend.models
System role: Current user profile HTTP API
"""

from fastapi import APIRouter, Depends

from backend.api.deps import get_current_user
from backend.boundary.db.models import User
from backend.models.common import ErrorResponse
from backend.models.user import UserResponse

router = APIRouter(prefix="/user", tags=["user"])


@router.get(
    "",
    response_model=UserResponse,
    responses={401: {"model": ErrorResponse}},
)
async def get_user(user: User = Depends(get_current_user)) -> UserResponse:
    """Return the profile of the user owning the bearer token."""
    return UserResponse.model_validate(user.to_dict())
