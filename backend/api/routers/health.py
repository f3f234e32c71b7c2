"""
Health check API endpoints.

Routes: GET /health, GET /health/db

The load balancer target group polls GET /health, so it never touches
the database. GET /health/db is for monitoring.

Dependencies: backend.boundary, backend.configs
System role: Health check HTTP API
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.api.deps import get_settings_dependency
from backend.boundary.db import get_async_db
from backend.configs import Settings
from backend.models.health import DatabaseHealthResponse, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_settings_dependency),
) -> HealthResponse:
    """Basic health check."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        environment=settings.app.env,
        version=settings.app.version,
    )


@router.get(
    "/db",
    response_model=DatabaseHealthResponse,
    responses={503: {"model": DatabaseHealthResponse}},
)
async def health_check_db(db: AsyncSession = Depends(get_async_db)):
    """Database health check."""
    try:
        await db.execute(text("SELECT 1"))
    # asyncpg surfaces refused or unresolvable hosts as bare OSError
    except (SQLAlchemyError, OSError) as e:
        logger.error("Database health check failed", extra={"error": str(e)})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=DatabaseHealthResponse(
                status="error",
                message="Database connection failed",
            ).model_dump(),
        )
    return DatabaseHealthResponse(status="ok", message="Database connection OK")
