"""
NoteKeeper Backend: Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Overview (all function-scoped):
    ├── db_engine / db_session: real SQLite database (aiosqlite) in tmp_path
    ├── mock_store: AsyncMock standing in for NoteStore
    ├── make_token / auth_headers: bearer tokens signed with the test secret
    └── test_client: HTTPX AsyncClient wired to the app, using db_engine
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock

# Override settings BEFORE any notekeeper import: settings is read at import time
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="notekeeper_test_"), "app.db")
)
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from notekeeper.database import Base, get_db_session
from notekeeper.services.note_store import NoteStore

TEST_SECRET = os.environ["JWT_SECRET"]


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """
    A fresh SQLite database per test with the schema created from the models.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def session_factory(db_engine):
    """Opens additional sessions on the same test database."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def mock_store():
    """
    A NoteStore double for service unit tests.

    Usage:
        mock_store.find_by_id.return_value = note
        await note_service.get_note(mock_store, note.id)
    """
    return AsyncMock(spec=NoteStore)


@pytest.fixture
def make_token():
    """Signs a token the way the external auth service does."""

    def _make(user_id: str = None, expires_in: int = 900, **claims) -> str:
        payload = dict(claims)
        if user_id is not None:
            payload["sub"] = user_id
        payload["exp"] = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return jwt.encode(payload, TEST_SECRET, algorithm="HS256")

    return _make


@pytest.fixture
def auth_headers(make_token):
    """auth_headers("alice") → {"Authorization": "Bearer <token for alice>"}"""

    def _headers(user_id: str) -> dict:
        return {"Authorization": f"Bearer {make_token(user_id)}"}

    return _headers


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    Async HTTP client talking to the app over ASGI, backed by db_engine.

    get_db_session is overridden so each request gets a session on the
    per-test database, with the same commit/rollback behaviour.
    """
    from notekeeper.main import app

    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def _test_db_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _test_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
