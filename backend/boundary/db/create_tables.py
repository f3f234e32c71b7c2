"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, backend.configs
System role: Database schema initialization

Usage:
    python -m backend.boundary.db.create_tables
    python -m backend.boundary.db.create_tables --drop
"""

import asyncio
import logging
import sys

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from backend.boundary.db.base import Base
from backend.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from backend.boundary.db.models import PersonalAccessToken, User  # noqa: F401

logger = logging.getLogger(__name__)

# Arbitrary application-wide key for pg_advisory_xact_lock
SCHEMA_LOCK_KEY = 7_263_514_001


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: only missing tables are created, so safe to run
    multiple times. Existing tables remain unchanged.

    On PostgreSQL the DDL runs under a transaction-scoped advisory lock so
    tasks starting together serialize instead of racing on CREATE TABLE.

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        if engine.dialect.name == "postgresql":
            await conn.execute(
                text("SELECT pg_advisory_xact_lock(:key)"), {"key": SCHEMA_LOCK_KEY}
            )
        await conn.run_sync(Base.metadata.create_all)
    logger.info("All tables created successfully.")


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("All tables dropped successfully.")


async def _main(drop: bool) -> None:
    engine = get_async_engine()
    try:
        if drop:
            await drop_all_tables(engine)
        await create_all_tables(engine)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    asyncio.run(_main(drop="--drop" in sys.argv[1:]))
