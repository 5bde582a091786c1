"""
Notes App — Test Configuration (conftest.py)
============================================

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session:  AsyncMock standing in for AsyncSession
    ├── sample_note:      transient Note instance
    ├── database:         temporary SQLite file behind the real store handle
    └── test_client:      HTTPX AsyncClient over ASGITransport (needs database)
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Must be set before notesapp.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["UI_API_BASE_URL"] = ""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notesapp.database import store


@pytest.fixture
def mock_db_session():
    """
    A mock async database session.

    Usage:
        mock_db_session.get.return_value = note
        result = await note_service.get_note(mock_db_session, str(note.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_note():
    """A transient Note row (never added to a session) with equal timestamps."""
    from notesapp.models.note import Note

    now = datetime.now(timezone.utc)
    return Note(
        id=uuid4(),
        title="Groceries",
        content="Milk, eggs, bread",
        created_at=now,
        updated_at=now,
    )


@pytest_asyncio.fixture
async def database(tmp_path):
    """Initializes the process-wide store on a fresh SQLite file and tears it down."""
    await store.dispose()
    store.init(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    await store.create_schema()
    yield store
    await store.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient wired straight to the FastAPI app (no server, no lifespan).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from notesapp.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
