"""API routers."""

from .health import router as health_router
from .tokens import router as tokens_router
from .user import router as user_router
from .web import router as web_router

__all__ = [
    "health_router",
    "tokens_router",
    "user_router",
    "web_router",
]
