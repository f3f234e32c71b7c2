"""
API token endpoints.

Routes: POST /tokens, DELETE /tokens/current

Dependencies: backend.application.services, backend.api.deps
System role: Personal access token HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from backend.api.deps import get_current_token, get_token_service
from backend.application.services.token_service import TokenService
from backend.boundary.db.models import PersonalAccessToken
from backend.core.exceptions import InvalidCredentialsError
from backend.models.common import ErrorResponse
from backend.models.token import CreateTokenRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tokens", tags=["tokens"])


@router.post(
    "",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={401: {"model": ErrorResponse}},
)
async def create_token(
    request: CreateTokenRequest,
    token_service: TokenService = Depends(get_token_service),
) -> TokenResponse:
    """
    Exchange email and password for a personal access token.

    The plain-text token is only ever returned here.

    Raises:
        HTTPException(401): Credentials do not match a user
    """
    try:
        issued = await token_service.issue(
            email=request.email,
            password=request.password,
            device_name=request.device_name,
            abilities=request.abilities,
        )
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=e.message)

    return TokenResponse(
        token=issued.plain_text_token,
        abilities=issued.access_token.abilities,
    )


@router.delete(
    "/current",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={401: {"model": ErrorResponse}},
)
async def revoke_current_token(
    access_token: PersonalAccessToken = Depends(get_current_token),
    token_service: TokenService = Depends(get_token_service),
) -> Response:
    """Revoke the token used to authenticate this request."""
    await token_service.revoke(access_token.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
