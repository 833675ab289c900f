"""Error Handlers — envelope shape and development-only details on 500s."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from app.api import error_handlers
from app.api.error_handlers import register_error_handlers
from app.config import Settings
from app.core.errors import DatabaseError, SiteNotFoundError


class _Body(BaseModel):
    count: int


def _bare_app() -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    @app.get("/db-down")
    async def db_down():
        raise DatabaseError("Connection or operational error", "execute")

    @app.get("/missing")
    async def missing():
        raise SiteNotFoundError()

    @app.post("/echo")
    async def echo(body: _Body):
        return body

    return app


@pytest.fixture
async def bare_client():
    transport = ASGITransport(app=_bare_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


def _use_environment(monkeypatch, environment: str) -> None:
    settings = Settings(environment=environment)
    monkeypatch.setattr(error_handlers, "get_settings", lambda: settings)


async def test_app_error_envelope(bare_client):
    resp = await bare_client.get("/missing")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Site not found", "code": "RESOURCE_NOT_FOUND"}


async def test_validation_error_details_drop_body_prefix(bare_client):
    resp = await bare_client.post("/echo", json={"count": "many"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["details"][0]["field"] == "count"
    assert body["details"][0]["type"] == "int_parsing"


async def test_internal_error_hides_details_in_production(bare_client, monkeypatch):
    _use_environment(monkeypatch, "production")
    resp = await bare_client.get("/boom")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error", "code": "INTERNAL_ERROR"}


async def test_internal_error_shows_details_in_development(bare_client, monkeypatch):
    _use_environment(monkeypatch, "development")
    resp = await bare_client.get("/boom")
    assert resp.status_code == 500
    assert resp.json()["details"] == "kaboom"


async def test_database_error_is_generic_500_in_production(bare_client, monkeypatch):
    _use_environment(monkeypatch, "production")
    resp = await bare_client.get("/db-down")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error", "code": "DATABASE_ERROR"}


async def test_database_error_reason_shown_in_development(bare_client, monkeypatch):
    _use_environment(monkeypatch, "development")
    resp = await bare_client.get("/db-down")
    assert resp.status_code == 500
    assert resp.json()["details"] == (
        "Database execute failed: Connection or operational error"
    )
