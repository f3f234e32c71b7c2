"""
Test suite for the create_user operator script.

System role: Verification of user seeding from the command line
"""

import asyncio
from unittest.mock import patch

import pytest

from backend.boundary.db import get_async_engine
from backend.boundary.db.create_tables import create_all_tables
from backend.configs import get_settings
from backend.scripts import create_user


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the script at a fresh SQLite file."""
    monkeypatch.setenv("POSTGRES_URL", f"sqlite+aiosqlite:///{tmp_path / 'seed.db'}")
    get_settings.cache_clear()

    async def _prepare() -> None:
        engine = get_async_engine()
        try:
            await create_all_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_prepare())


@pytest.fixture(autouse=True)
def keep_logging():
    with patch.object(create_user, "configure_logging"):
        yield


def test_main_creates_user(database, capsys) -> None:
    # Act
    code = create_user.main(
        ["--name", "Ops", "--email", "ops@example.com", "--password", "secret"]
    )

    # Assert
    assert code == 0
    assert capsys.readouterr().out == ""


def test_main_prints_token(database, capsys) -> None:
    code = create_user.main(
        [
            "--name", "Ops",
            "--email", "ops@example.com",
            "--password", "secret",
            "--token", "deploy-check",
        ]
    )

    assert code == 0
    token = capsys.readouterr().out.strip()
    assert token.startswith("1|")


def test_main_rejects_duplicate_email(database) -> None:
    argv = ["--name", "Ops", "--email", "ops@example.com", "--password", "secret"]

    assert create_user.main(argv) == 0
    assert create_user.main(argv) == 1


def test_main_requires_arguments() -> None:
    with pytest.raises(SystemExit):
        create_user.main(["--name", "Ops"])
