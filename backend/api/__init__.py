"""
API routes module.

FastAPI routers for all HTTP endpoints. api_router is mounted under
/api; the web root router is mounted without a prefix.
"""

from fastapi import APIRouter

from .routers import (
    health_router,
    tokens_router,
    user_router,
    web_router,
)

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(user_router)
api_router.include_router(tokens_router)

__all__ = ["api_router", "web_router"]
