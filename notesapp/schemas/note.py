"""
Notes App — Pydantic Request/Response Schemas
=============================================

What:  The API contract between clients (including the built-in UI) and the
       service.
How:   FastAPI validates request bodies against these models and serializes
       responses through them. Timestamps go out as `createdAt`/`updatedAt`
       in ISO 8601 UTC.

Wire format of a note:
    {
        "id": "0b9f3c1e-...",
        "title": "Groceries",
        "content": "Milk, eggs",
        "createdAt": "2024-01-15T12:00:00.123456+00:00",
        "updatedAt": "2024-01-15T12:00:00.123456+00:00"
    }
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_serializer


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteInput(BaseModel):
    """
    Body of POST and PUT /api/notes.

    Both fields are optional at the schema level so that a missing field
    reaches NoteService, which reports it with the API's own message
    ("Title and content are required") rather than a framework 422.
    Non-string values are still rejected by pydantic.
    """
    title: Optional[str] = Field(default=None, description="Note title (1-100 chars after trimming)")
    content: Optional[str] = Field(default=None, description="Note body (non-empty after trimming)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a stored note."""
    id: uuid.UUID = Field(description="Unique note identifier (UUID)")
    title: str = Field(description="Trimmed title")
    content: str = Field(description="Trimmed content")
    created_at: datetime = Field(
        alias="createdAt",
        description="When the note was created (UTC ISO 8601)",
    )
    updated_at: datetime = Field(
        alias="updatedAt",
        description="When the note was last changed (UTC ISO 8601)",
    )

    model_config = {"from_attributes": True, "populate_by_name": True}

    @field_serializer("created_at", "updated_at")
    def serialize_utc(self, value: datetime) -> str:
        # SQLite hands back naive datetimes; everything is stored as UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()


class MessageResponse(BaseModel):
    """Confirmation body, e.g. after a delete."""
    message: str


class ErrorResponse(BaseModel):
    """
    Error body shared by every endpoint.

    Example:
        {"error": "Title and content are required"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and container probes."""
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Record store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since the service started")
