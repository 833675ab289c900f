"""Health & Readiness — liveness always up, readiness follows the database."""

from unittest.mock import AsyncMock, MagicMock

from app.infrastructure import database


async def test_liveness(client):
    resp = await client.get("/api/health/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


async def test_ready_when_database_healthy(client, monkeypatch):
    manager = MagicMock()
    manager.health_check = AsyncMock(return_value=True)
    monkeypatch.setattr(database, "db_manager", manager)
    resp = await client.get("/api/health/ready")
    assert resp.status_code == 200
    assert resp.json()["checks"]["database"] == "healthy"


async def test_not_ready_when_database_down(client, monkeypatch):
    manager = MagicMock()
    manager.health_check = AsyncMock(return_value=False)
    monkeypatch.setattr(database, "db_manager", manager)
    resp = await client.get("/api/health/ready")
    assert resp.status_code == 503
    assert resp.json()["reason"] == "database_unavailable"


async def test_not_ready_before_init(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)
    resp = await client.get("/api/health/ready")
    assert resp.status_code == 503
