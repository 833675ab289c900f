"""Async Session Factory — provides async DB sessions for direct usage outside FastAPI.

Invariants:
    - Engines built here get the same SQLite FK pragma as DatabaseSessionManager
    - Meant for scripts, migrations, and test fixtures

Design Decisions:
    - Separate from infrastructure/database.py: this is a convenience for non-FastAPI contexts
      (alembic and test fixtures need a raw engine and session factory)
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from app.infrastructure.database import enable_sqlite_foreign_keys


def create_engine(database_url: str) -> AsyncEngine:
    """Create an async engine with FK enforcement on SQLite."""
    kwargs: dict = {"echo": False}
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        # one shared connection, otherwise each checkout sees an empty database
        kwargs["poolclass"] = StaticPool
    engine = create_async_engine(database_url, **kwargs)
    enable_sqlite_foreign_keys(engine)
    return engine


def create_session_factory(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the given engine."""
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
