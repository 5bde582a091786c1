"""
Notes App — Note SQLAlchemy Model
=================================

What:  ORM model for the `notes` table.
Who:   Used by NoteService for CRUD and by Alembic for schema management.

Table Design:
    - id:          UUID primary key, assigned in Python at creation
    - title:       VARCHAR(100), trimmed and non-empty
    - content:     TEXT, trimmed and non-empty, no length limit
    - created_at:  set once, never updated
    - updated_at:  equal to created_at on insert, refreshed on every update

    Index on created_at DESC serves the default listing (newest first).
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notesapp.database import Base

TITLE_MAX_LENGTH = 100


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A titled block of text with creation and update timestamps.

    Lifecycle:
        1. Created by NoteService.create_note (created_at == updated_at)
        2. title/content replaced by NoteService.update_note (updated_at bumped)
        3. Removed by NoteService.delete_note (hard delete)
    """

    __tablename__ = "notes"

    # Generic Uuid type: native UUID on PostgreSQL, CHAR(32) on SQLite
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # All timestamps are UTC
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    __table_args__ = (
        Index("idx_notes_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', created_at='{self.created_at}')>"
