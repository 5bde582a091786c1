"""
Notes App — Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for each error category.
How:   Each exception carries a client-safe message and an optional context
       dict. Handlers registered in main.py translate them into
       `{"error": <message>}` responses with the matching status code.
Who:   Raised by the store handle and NoteService; caught by global handlers.

Exception Hierarchy:
    NotesAppError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class NotesAppError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Client-facing error text (returned as the `error` field)
        context:  Debug details (logged, never returned to the client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesAppError):
    """
    Raised when client input fails validation.

    When:  Missing or blank title/content, title too long, missing note ID.
    HTTP:  400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NotesAppError):
    """
    Raised when an identifier does not resolve to a stored record.

    The message follows the "<Resource> not found" form, e.g. "Note not found".
    The identifier itself stays in the context, not in the message.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource.capitalize()} not found", context=ctx)


class DatabaseError(NotesAppError):
    """
    Raised when a record store operation fails.

    When:  Connection lost, query failure, commit failure, store not initialized.
    HTTP:  500 Internal Server Error

    The message is a generic per-operation text ("Failed to create note").
    The original exception type goes into the context and the server log.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


# Client-facing DatabaseError text, one per operation
FETCH_FAILED_MESSAGE = "Failed to fetch notes"
CREATE_FAILED_MESSAGE = "Failed to create note"
UPDATE_FAILED_MESSAGE = "Failed to update note"
DELETE_FAILED_MESSAGE = "Failed to delete note"

STORE_FAILURE_MESSAGES = {
    "GET": FETCH_FAILED_MESSAGE,
    "POST": CREATE_FAILED_MESSAGE,
    "PUT": UPDATE_FAILED_MESSAGE,
    "DELETE": DELETE_FAILED_MESSAGE,
}
