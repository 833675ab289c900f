"""API test fixtures — app instance bound to the per-test in-memory database.

Invariants:
    - Each test builds its own app via create_app(); overrides never leak between tests
    - get_db is overridden with a session from the test engine (lifespan is not run)
    - base_url http://testserver so the signed session cookie round-trips in the jar
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.infrastructure.database import get_db
from app.main import create_app

PASSWORD = "secret1"


@pytest.fixture
def app(test_session_factory):
    application = create_app()

    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver",
    ) as c:
        yield c


@pytest.fixture
async def other_client(app):
    """Second cookie jar against the same app: a different signed-in user."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver",
    ) as c:
        yield c


async def _register_and_login(
    client: AsyncClient, email: str, name: str = "Ann", password: str = PASSWORD,
) -> dict:
    """Register an account, sign in on this client, return the user payload."""
    resp = await client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert resp.status_code == 200, resp.text
    resp = await client.post(
        "/api/auth/login", json={"email": email, "password": password},
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["user"]


@pytest.fixture
async def ann(client):
    return await _register_and_login(client, "ann@x.com", name="Ann")


@pytest.fixture
async def bob(other_client):
    return await _register_and_login(other_client, "bob@y.com", name="Bob")


@pytest.fixture
def register_and_login():
    return _register_and_login
