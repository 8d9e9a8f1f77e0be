"""
Main Application Unit Tests

Tests for application startup and health endpoints with mocked infrastructure.
Runs without Docker - uses mocks for the database checks.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from knowledge_hub.main import app, lifespan


def test_health_check():
    """
    Verify /health endpoint returns correct response structure.

    TestClient triggers the lifespan handler, so the DB check and table
    creation must be mocked.
    """
    with (
        patch("knowledge_hub.main.wait_for_db", new_callable=AsyncMock) as mock_db,
        patch("knowledge_hub.main.create_tables", new_callable=AsyncMock) as mock_tables,
    ):
        mock_db.return_value = True

        with TestClient(app) as client:
            response = client.get("/health")

            assert response.status_code == 200
            data = response.json()

            assert data["status"] == "ok"
            assert data["service"] == "knowledge-hub"
            assert "db" in data
            assert "environment" in data

        mock_tables.assert_awaited_once()


@pytest.mark.asyncio
async def test_startup_fails_without_database():
    with (
        patch("knowledge_hub.main.wait_for_db", new_callable=AsyncMock) as mock_db,
        patch("knowledge_hub.main.create_tables", new_callable=AsyncMock) as mock_tables,
    ):
        mock_db.return_value = False

        with pytest.raises(RuntimeError, match="Database connection failed"):
            async with lifespan(app):
                pass

        mock_tables.assert_not_awaited()


def test_collection_routes_require_owner_header():
    with (
        patch("knowledge_hub.main.wait_for_db", new_callable=AsyncMock, return_value=True),
        patch("knowledge_hub.main.create_tables", new_callable=AsyncMock),
    ):
        with TestClient(app) as client:
            response = client.get("/api/v1/notes/")

    assert response.status_code == 401
