"""
Notes App — Record Store Handle
===============================

What:  Process-wide handle around the async SQLAlchemy engine, its session
       factory, and the FastAPI session dependency.
How:   `store.init()` builds the engine once; later calls are no-ops.
       `store.dispose()` closes the pool and resets the handle so a later
       `init()` starts fresh. The app lifespan calls both.
Who:   Routes receive sessions through `get_db_session`; the health check
       uses `store.ping()`; tests point `init()` at a temporary SQLite file.

Lifecycle:
    ┌──────────┐ init() ┌─────────────┐ dispose() ┌──────────┐
    │  empty   │───────▶│ initialized │──────────▶│  empty   │
    └──────────┘        └─────────────┘           └──────────┘
                          │  ▲
                          └──┘ init() again: no-op
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notesapp.config import settings
from notesapp.exceptions import FETCH_FAILED_MESSAGE, STORE_FAILURE_MESSAGES, DatabaseError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models, `create_schema()` and
    Alembic's autogenerate.
    """
    pass


class RecordStore:
    """
    Owns the engine and session factory for the lifetime of the process.

    Engine options:
        PostgreSQL: pool_size / max_overflow / pre_ping from settings,
                    connections recycled hourly.
        SQLite:     driver default pool (pool sizing is not supported there).
    """

    def __init__(self) -> None:
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise DatabaseError(
                message="Record store is not initialized",
                context={"hint": "call store.init() during startup"},
            )
        return self._engine

    def init(self, database_url: Optional[str] = None) -> AsyncEngine:
        """
        Create the engine and session factory if not already done.

        Args:
            database_url: Overrides settings.database_url (used by tests).

        Returns:
            The process-wide engine. Repeated calls return the same engine
            and ignore `database_url`.
        """
        if self._engine is not None:
            logger.debug("Record store already initialized; skipping")
            return self._engine

        url = database_url or settings.database_url
        options = {"echo": settings.log_level == "DEBUG"}
        if not url.startswith("sqlite"):
            options.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )

        self._engine = create_async_engine(url, **options)
        # expire_on_commit=False: returned rows stay readable after commit
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Record store initialized (%s)", self._engine.url.render_as_string(hide_password=True))
        return self._engine

    def session(self) -> AsyncSession:
        """Open a new session. Caller is responsible for closing it."""
        if self._session_factory is None:
            raise DatabaseError(
                message="Record store is not initialized",
                context={"hint": "call store.init() during startup"},
            )
        return self._session_factory()

    async def create_schema(self) -> None:
        """Create all tables known to Base.metadata (development and tests)."""
        # Registers the notes table on Base.metadata
        from notesapp.models import note  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Record store schema ensured")

    async def ping(self) -> bool:
        """Run SELECT 1; True when the store answers."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Record store ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close every pooled connection and reset the handle."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Record store disposed")


store = RecordStore()


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency providing one session per request.

    A store that was never initialized is reported with the request
    operation's generic message ("Failed to create note" for POST).
    Rolls back on any exception raised while the request is handled, then
    re-raises so the global handlers can respond. Writes are committed by
    NoteService itself, so nothing is committed here.

    Usage:
        @router.get("/notes")
        async def list_notes(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    try:
        session = store.session()
    except DatabaseError as e:
        logger.error("Cannot open session: %s | Context: %s", e.message, e.context)
        raise DatabaseError(
            message=STORE_FAILURE_MESSAGES.get(request.method, FETCH_FAILED_MESSAGE),
            context={**e.context, "error_type": type(e).__name__},
        )

    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
