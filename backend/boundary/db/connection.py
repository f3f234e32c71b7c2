"""
Database connection management.

Provides the async SQLAlchemy engine, session factory, and FastAPI
dependency for database session injection.

Dependencies: sqlalchemy, backend.configs
System role: Database connection lifecycle management
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool

from backend.configs import Settings, get_settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_async_engine(settings: Settings | None = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine with connection pooling.

    PostgreSQL uses the default async queue pool with pre-ping to detect
    stale connections. SQLite gets a StaticPool for in-memory databases
    and a NullPool for file databases.

    Args:
        settings: Settings to read from (defaults to get_settings())

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = (settings or get_settings()).database
    url = db_config.async_database_url

    if db_config.is_sqlite:
        poolclass = StaticPool if ":memory:" in url else NullPool
        engine = create_async_engine(
            url,
            echo=db_config.echo_sql,
            connect_args={"check_same_thread": False},
            poolclass=poolclass,
        )
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Returns fresh async_sessionmaker bound to engine with autoflush=False
    for explicit transaction control and expire_on_commit=False so loaded
    rows stay readable after commit.

    Returns:
        async_sessionmaker: Async session factory

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Uses the session factory stored on the application state so tests can
    swap the database. Services commit explicitly; uncommitted work is
    rolled back when the session closes.

    Yields:
        AsyncSession: Async SQLAlchemy database session (scoped to request lifetime)

    Usage:
        from fastapi import Depends

        @app.get("/users/{id}")
        async def get_user(id: int, db: AsyncSession = Depends(get_async_db)):
            return await user_crud.get_by_id(db, id)
    """
    SessionFactory = request.app.state.session_factory
    async with SessionFactory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
