"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, backend.api, backend.observability, backend.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import async_sessionmaker
from starlette.middleware.authentication import AuthenticationMiddleware

from backend.api import api_router, web_router
from backend.api.auth import (
    RedirectIfAuthenticatedMiddleware,
    TokenAuthBackend,
    TrustHostsMiddleware,
)
from backend.boundary.db import get_async_engine, get_async_session_factory
from backend.configs import Settings, get_settings
from backend.observability.logger import configure_logging
from backend.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)

# Polled by the load balancer with the task IP as Host
HEALTH_CHECK_PATHS = ("/api/health",)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings: Settings = app.state.settings

    # Startup
    configure_logging(settings.app.log_level, echo_sql=settings.database.echo_sql)
    logger.info(
        "Application startup",
        extra={"app_env": settings.app.env, "version": settings.app.version},
    )

    yield

    # Shutdown
    engine = app.state.engine
    if engine is not None:
        await engine.dispose()
    logger.info("Application shutdown")


def create_app(
    settings: Settings | None = None,
    session_factory: async_sessionmaker | None = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings to run with (defaults to get_settings())
        session_factory: Session factory to use instead of one built from
            settings.database; the caller then owns its engine

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        debug=settings.app.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    if session_factory is None:
        app.state.engine = get_async_engine(settings)
        app.state.session_factory = get_async_session_factory(app.state.engine)
    else:
        app.state.engine = None
        app.state.session_factory = session_factory

    # Added first = innermost; the last one added runs first
    app.add_middleware(
        RedirectIfAuthenticatedMiddleware,
        home_path=settings.auth.home_path,
        guest_paths=settings.auth.guest_paths,
    )
    app.add_middleware(AuthenticationMiddleware, backend=TokenAuthBackend())
    app.add_middleware(
        TrustHostsMiddleware,
        url=settings.app.url,
        extra_hosts=settings.app.trusted_hosts,
        exempt_paths=HEALTH_CHECK_PATHS,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register API routes
    app.include_router(api_router, prefix="/api")
    app.include_router(web_router)

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backend.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
    )
