"""
Words API — Test Configuration (conftest.py)
==============================================

Shared pytest fixtures.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for service unit tests (no DB)
    ├── bind_sessions:   Rebinds the real session dependency to a test engine
    ├── sqlite_engine:   File-backed aiosqlite pool with the words table created
    ├── test_client:     HTTPX AsyncClient against the app, sessions bound to sqlite_engine
    └── sample_word:     A valid add-word payload
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set before any app import; the module-level pool is built from these
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_LEVEL"] = "WARNING"

from app import database  # noqa: E402
from app.database import ConnectionConfig, create_pool, create_schema  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_list(mock_db_session):
            mock_db_session.execute.return_value.scalars.return_value.all.return_value = []
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def bind_sessions(monkeypatch):
    """
    Point the real get_db_session at another engine.

    Swaps app.database.async_session_factory for the test; the dependency
    itself is never overridden, so its rollback/close rules stay under test.
    """

    def _bind(engine: AsyncEngine, session_class=AsyncSession) -> None:
        factory = async_sessionmaker(engine, class_=session_class, expire_on_commit=False)
        monkeypatch.setattr(database, "async_session_factory", factory)

    return _bind


@pytest.fixture
def sample_word():
    return {"chinese": "你好", "pinyin": "nǐ hǎo", "english": "hello"}


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """A fresh file database per test, built through the same create_pool()."""
    config = ConnectionConfig(url=make_url(f"sqlite+aiosqlite:///{tmp_path / 'words.db'}"))
    engine = create_pool(config, pool_size=5, max_overflow=0)
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(sqlite_engine, bind_sessions) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to a fresh app instance.

    Sessions come from sqlite_engine through the real get_db_session. The
    lifespan is not run, so the process-wide asyncpg pool is never touched.
    """
    from app.main import create_app

    bind_sessions(sqlite_engine)
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
