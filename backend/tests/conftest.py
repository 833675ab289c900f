"""Root conftest — environment for tests and a fresh in-memory database per test.

Invariants:
    - Environment is set before any app module is imported (get_settings is cached)
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - bcrypt runs at minimum cost so auth tests stay fast

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for repository and route
      tests (PostgreSQL-specific features are not exercised)
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402

from app.db.base import Base  # noqa: E402
from app.db.session import create_engine, create_session_factory  # noqa: E402
import app.models  # noqa: E402,F401
from app.services.site_repository import SqlSiteRepository  # noqa: E402
from app.services.user_repository import SqlUserRepository  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def user_repo(test_db):
    return SqlUserRepository(test_db)


@pytest.fixture
def site_repo(test_db):
    return SqlSiteRepository(test_db)


@pytest.fixture
async def make_user(user_repo):
    """Insert a user directly (no password hashing) and return it."""
    counter = {"n": 0}

    async def _make(name: str = "User", email: str | None = None, tokens: int = 100):
        counter["n"] += 1
        email = email or f"user{counter['n']}@x.com"
        return await user_repo.add(
            name=name, email=email, password_hash="not-a-hash", tokens_balance=tokens,
        )

    return _make
