"""
Notes App — Note Service (CRUD over the record store)
=====================================================

What:  Validation and persistence for the four note operations.
How:   Each method takes the request's AsyncSession, performs a single store
       round trip, commits writes, and returns pydantic response models.
Who:   Called by the /api/notes route handlers.

Error Translation:
    ValidationError  raised before touching the store (nothing is written)
    NotFoundError    identifier does not resolve (including malformed UUIDs)
    DatabaseError    anything the store raises, with a per-operation message:
                         list/get → "Failed to fetch notes"
                         create   → "Failed to create note"
                         update   → "Failed to update note"
                         delete   → "Failed to delete note"

Concurrency:
    No version check. Two updates to the same note are last-write-wins.
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID, uuid4

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.exceptions import (
    CREATE_FAILED_MESSAGE,
    DELETE_FAILED_MESSAGE,
    FETCH_FAILED_MESSAGE,
    UPDATE_FAILED_MESSAGE,
    DatabaseError,
    NotesAppError,
    NotFoundError,
    ValidationError,
)
from notesapp.models.note import TITLE_MAX_LENGTH, Note, utc_now
from notesapp.schemas.note import NoteResponse

logger = logging.getLogger(__name__)

FIELDS_REQUIRED_MESSAGE = "Title and content are required"
ID_REQUIRED_MESSAGE = "Note ID is required"
TITLE_TOO_LONG_MESSAGE = f"Title cannot be more than {TITLE_MAX_LENGTH} characters"
INVALID_JSON_MESSAGE = "Invalid JSON body"


def normalize_note_fields(title: Optional[str], content: Optional[str]) -> Tuple[str, str]:
    """
    Trim title and content and enforce the note invariants.

    Returns:
        (title, content) with surrounding whitespace removed

    Raises:
        ValidationError: either field missing or blank, or title too long
    """
    title = (title or "").strip()
    content = (content or "").strip()
    if not title or not content:
        raise ValidationError(message=FIELDS_REQUIRED_MESSAGE)
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            message=TITLE_TOO_LONG_MESSAGE,
            field="title",
            context={"length": len(title)},
        )
    return title, content


def require_note_id(note_id: Optional[str]) -> str:
    """Raise ValidationError when the identifier is missing or empty."""
    if not note_id:
        raise ValidationError(message=ID_REQUIRED_MESSAGE, field="id")
    return note_id


def _parse_note_id(note_id: str) -> UUID:
    # A malformed identifier cannot name any stored note
    try:
        return UUID(note_id)
    except (TypeError, ValueError):
        raise NotFoundError(resource="note", resource_id=note_id)


class NoteService:
    """
    Stateless business logic for notes.

    Every method re-raises the application's own exceptions unchanged and
    wraps anything else in DatabaseError, logging the original.
    """

    async def list_notes(self, db: AsyncSession) -> List[NoteResponse]:
        """
        All notes, newest first.

        Query plan:
            SELECT * FROM notes ORDER BY created_at DESC
            → idx_notes_created_at
        """
        try:
            result = await db.execute(select(Note).order_by(desc(Note.created_at)))
            notes = result.scalars().all()
            return [NoteResponse.model_validate(note) for note in notes]
        except Exception as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message=FETCH_FAILED_MESSAGE,
                context={"error_type": type(e).__name__},
            )

    async def get_note(self, db: AsyncSession, note_id: str) -> NoteResponse:
        """
        A single note by identifier.

        Raises:
            NotFoundError: no note with this identifier (→ 404)
            DatabaseError: query failed (→ 500)
        """
        try:
            note = await db.get(Note, _parse_note_id(note_id))
            if note is None:
                raise NotFoundError(resource="note", resource_id=note_id)
            return NoteResponse.model_validate(note)
        except NotesAppError:
            raise
        except Exception as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message=FETCH_FAILED_MESSAGE,
                context={"note_id": note_id, "error_type": type(e).__name__},
            )

    async def create_note(
        self,
        db: AsyncSession,
        title: Optional[str],
        content: Optional[str],
    ) -> NoteResponse:
        """
        Validate, trim, and insert a new note.

        Both timestamps come from one clock reading, so a fresh note always
        has created_at == updated_at.
        """
        title, content = normalize_note_fields(title, content)

        try:
            now = utc_now()
            note = Note(
                id=uuid4(),
                title=title,
                content=content,
                created_at=now,
                updated_at=now,
            )
            db.add(note)
            await db.commit()
            logger.info("Note created: %s", note.id)
            return NoteResponse.model_validate(note)
        except Exception as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message=CREATE_FAILED_MESSAGE,
                context={"error_type": type(e).__name__},
            )

    async def update_note(
        self,
        db: AsyncSession,
        note_id: Optional[str],
        title: Optional[str],
        content: Optional[str],
    ) -> NoteResponse:
        """
        Replace title and content of an existing note and bump updated_at.

        id and created_at are never touched. The identifier is checked before
        the body so a missing ID is reported first.
        """
        note_id = require_note_id(note_id)
        title, content = normalize_note_fields(title, content)

        try:
            note = await db.get(Note, _parse_note_id(note_id))
            if note is None:
                raise NotFoundError(resource="note", resource_id=note_id)

            note.title = title
            note.content = content
            note.updated_at = utc_now()
            await db.commit()
            logger.info("Note updated: %s", note.id)
            return NoteResponse.model_validate(note)
        except NotesAppError:
            raise
        except Exception as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message=UPDATE_FAILED_MESSAGE,
                context={"note_id": note_id, "error_type": type(e).__name__},
            )

    async def delete_note(self, db: AsyncSession, note_id: Optional[str]) -> None:
        """
        Hard-delete a note.

        Deleting the same identifier twice reports NotFoundError the second time.
        """
        note_id = require_note_id(note_id)

        try:
            note = await db.get(Note, _parse_note_id(note_id))
            if note is None:
                raise NotFoundError(resource="note", resource_id=note_id)

            await db.delete(note)
            await db.commit()
            logger.info("Note deleted: %s", note_id)
        except NotesAppError:
            raise
        except Exception as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message=DELETE_FAILED_MESSAGE,
                context={"note_id": note_id, "error_type": type(e).__name__},
            )


note_service = NoteService()
