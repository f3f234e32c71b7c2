"""
Tests for the health endpoints.

System role: Verification of load balancer and monitoring probes
"""

from datetime import datetime
from unittest.mock import AsyncMock

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db import get_async_db
from backend.main import create_app
from conftest import make_settings


class TestHealthEndpoint:
    """Test suite for GET /api/health."""

    def test_health_check(self, client: TestClient) -> None:
        # Act
        response = client.get("/api/health")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["environment"] == "testing"
        assert body["version"] == "1.2.3"
        assert datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00")).tzinfo

    def test_health_check_ignores_host_header(self, client: TestClient) -> None:
        """Test the load balancer can probe a task by IP."""
        response = client.get("/api/health", headers={"Host": "10.0.10.23:80"})

        assert response.status_code == 200

    def test_health_check_needs_no_token(self, client: TestClient) -> None:
        response = client.get("/api/health", headers={"Authorization": "Bearer 1|nope"})

        assert response.status_code == 200


class TestDatabaseHealthEndpoint:
    """Test suite for GET /api/health/db."""

    def test_health_check_db(self, client: TestClient) -> None:
        response = client.get("/api/health/db")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "message": "Database connection OK"}

    def test_health_check_db_failure(self, client: TestClient) -> None:
        # Arrange
        failing_session = AsyncMock(spec=AsyncSession)
        failing_session.execute.side_effect = OperationalError(
            "SELECT 1", {}, Exception("connection refused")
        )

        async def override_db():
            yield failing_session

        client.app.dependency_overrides[get_async_db] = override_db

        # Act
        response = client.get("/api/health/db")

        # Assert
        assert response.status_code == 503
        assert response.json() == {
            "status": "error",
            "message": "Database connection failed",
        }

    def test_health_check_db_connection_refused(self, client: TestClient) -> None:
        """Test driver-level socket errors are reported as 503, not 500."""
        # Arrange
        refusing_session = AsyncMock(spec=AsyncSession)
        refusing_session.execute.side_effect = ConnectionRefusedError(
            111, "Connect call failed ('127.0.0.1', 1)"
        )

        async def override_db():
            yield refusing_session

        client.app.dependency_overrides[get_async_db] = override_db

        # Act
        response = client.get("/api/health/db")

        # Assert
        assert response.status_code == 503
        assert response.json()["status"] == "error"

    def test_health_check_db_unreachable_server(self) -> None:
        """Test an app pointed at a closed PostgreSQL port answers 503."""
        # Arrange
        settings = make_settings("postgresql+asyncpg://u:p@127.0.0.1:1/db")
        client = TestClient(create_app(settings))

        # Act
        response = client.get("/api/health/db")

        # Assert
        assert response.status_code == 503
        assert response.json() == {
            "status": "error",
            "message": "Database connection failed",
        }
