"""
Notes App — Notes Route Handlers
================================

What:  GET / POST / PUT / DELETE on /api/notes.
How:   One resource path; the note is selected with the `id` query parameter.
       Handlers only extract input and delegate to NoteService. PUT parses
       its body itself, after the `id` check. Errors propagate to the
       handlers registered in main.py.

    GET    /api/notes           → all notes, newest first
    GET    /api/notes?id=<id>   → one note
    POST   /api/notes           → create (201)
    PUT    /api/notes?id=<id>   → update
    DELETE /api/notes?id=<id>   → delete
"""

import json
import logging
from typing import List, Optional, Union

import pydantic
from fastapi import APIRouter, Body, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.database import get_db_session
from notesapp.exceptions import ValidationError
from notesapp.schemas.note import ErrorResponse, MessageResponse, NoteInput, NoteResponse
from notesapp.services.note_service import (
    FIELDS_REQUIRED_MESSAGE,
    INVALID_JSON_MESSAGE,
    note_service,
    require_note_id,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


async def read_note_input(request: Request) -> NoteInput:
    """
    Parse a NoteInput from the raw request body.

    An empty body or JSON `null` yields an empty NoteInput, so NoteService
    reports the missing fields itself.

    Raises:
        ValidationError: body is not JSON, or fields are not strings
    """
    raw = await request.body()
    if not raw:
        return NoteInput()
    try:
        data = json.loads(raw)
    except ValueError:
        raise ValidationError(message=INVALID_JSON_MESSAGE)
    if data is None:
        return NoteInput()
    try:
        return NoteInput.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(message=FIELDS_REQUIRED_MESSAGE, context={"errors": e.errors()})


@router.get(
    "/notes",
    response_model=Union[NoteResponse, List[NoteResponse]],
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all notes or fetch one by id",
)
async def get_notes(
    note_id: Optional[str] = Query(default=None, alias="id", description="Note identifier (UUID)"),
    db: AsyncSession = Depends(get_db_session),
) -> Union[NoteResponse, List[NoteResponse]]:
    """
    Without `id` (or with an empty one): every note, sorted by createdAt
    descending. With `id`: that note or 404.
    """
    if note_id:
        return await note_service.get_note(db=db, note_id=note_id)
    return await note_service.list_notes(db=db)


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=201,
    responses={
        400: {"description": "Missing or invalid fields", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: Optional[NoteInput] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    payload = payload or NoteInput()
    return await note_service.create_note(db=db, title=payload.title, content=payload.content)


@router.put(
    "/notes",
    response_model=NoteResponse,
    responses={
        400: {"description": "Missing id or fields", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Replace a note's title and content",
    openapi_extra={
        "requestBody": {
            "required": False,
            "content": {"application/json": {"schema": NoteInput.model_json_schema()}},
        },
    },
)
async def update_note(
    request: Request,
    note_id: Optional[str] = Query(default=None, alias="id", description="Note identifier (UUID)"),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    A missing `id` is reported before the body is read.
    """
    note_id = require_note_id(note_id)
    payload = await read_note_input(request)
    return await note_service.update_note(
        db=db,
        note_id=note_id,
        title=payload.title,
        content=payload.content,
    )


@router.delete(
    "/notes",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing id", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: Optional[str] = Query(default=None, alias="id", description="Note identifier (UUID)"),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await note_service.delete_note(db=db, note_id=note_id)
    return MessageResponse(message="Note deleted successfully")
