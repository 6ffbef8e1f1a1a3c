"""Unit tests for service info endpoints."""

import pytest


@pytest.mark.asyncio
async def test_root(test_client_with_db):
    response = await test_client_with_db.get("/")

    assert response.status_code == 200
    assert response.json()["name"] == "Query Safety API"


@pytest.mark.asyncio
async def test_health_checks_database(test_client_with_db):
    """Test health reports the configured time zone once the database answers."""
    response = await test_client_with_db.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "timezone": "UTC"}
