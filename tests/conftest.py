"""
Shared test fixtures and configuration for entire test suite.

Provides: settings pointing at SQLite, an in-memory async session, a
FastAPI app backed by a per-test SQLite file, and a seeded user with an
API token.
Dependencies: pytest, sqlalchemy, fastapi
System role: Test infrastructure and fixture management
"""

import asyncio
import os
from dataclasses import dataclass

# Must be set before any settings object is built
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("APP_URL", "http://testserver")
os.environ.setdefault("AUTH_BCRYPT_ROUNDS", "4")
os.environ.setdefault("POSTGRES_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient

from backend.application.services import TokenService, UserService
from backend.boundary.db import (
    get_async_engine,
    get_async_session_factory,
)
from backend.boundary.db.create_tables import create_all_tables
from backend.configs import Settings, get_settings
from backend.configs.app import AppSettings
from backend.configs.auth import AuthSettings
from backend.configs.database import DatabaseSettings
from backend.main import create_app

get_settings.cache_clear()

TEST_PASSWORD = "correct-horse-battery-staple"


def make_settings(database_url: str, **auth_overrides) -> Settings:
    """Settings for tests, independent of the process environment."""
    return Settings(
        app=AppSettings(
            name="Webapp",
            env="testing",
            url="http://testserver",
            version="1.2.3",
        ),
        database=DatabaseSettings(url=database_url),
        auth=AuthSettings(bcrypt_rounds=4, **auth_overrides),
    )


@dataclass
class SeededUser:
    """User created directly in the test database."""
    id: int
    name: str
    email: str
    password: str
    token: str


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; reset around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    settings = make_settings("sqlite+aiosqlite:///:memory:")
    engine = get_async_engine(settings)
    await create_all_tables(engine)

    SessionFactory = get_async_session_factory(engine)
    async with SessionFactory() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
def app_settings(tmp_path) -> Settings:
    """Settings backed by a SQLite file unique to the test."""
    return make_settings(f"sqlite+aiosqlite:///{tmp_path / 'webapp.db'}")


def _run(coro):
    return asyncio.run(coro)


@pytest.fixture
def app(app_settings):
    """
    Fully wired application with its schema created.

    The file database with NullPool lets the TestClient's event loop and
    the fixtures' asyncio.run loops each open their own connections.
    """

    async def _prepare() -> None:
        engine = get_async_engine(app_settings)
        try:
            await create_all_tables(engine)
        finally:
            await engine.dispose()

    _run(_prepare())
    return create_app(app_settings)


@pytest.fixture
def client(app) -> TestClient:
    """HTTP client without lifespan (logging config stays untouched)."""
    return TestClient(app)


@pytest.fixture
def seeded_user(app, app_settings) -> SeededUser:
    """A verified user with one full-access API token."""

    async def _seed() -> SeededUser:
        engine = get_async_engine(app_settings)
        SessionFactory = get_async_session_factory(engine)
        try:
            async with SessionFactory() as session:
                user = await UserService(session).register(
                    name="Taylor Otwell",
                    email="taylor@example.com",
                    password=TEST_PASSWORD,
                    verified=True,
                )
                issued = await TokenService(session, app_settings.auth).create_token(
                    user, "pytest"
                )
                return SeededUser(
                    id=user.id,
                    name=user.name,
                    email=user.email,
                    password=TEST_PASSWORD,
                    token=issued.plain_text_token,
                )
        finally:
            await engine.dispose()

    return _run(_seed())


@pytest.fixture
def auth_headers(seeded_user) -> dict[str, str]:
    return {"Authorization": f"Bearer {seeded_user.token}"}
