"""
Notes App — UI State
====================

What:  The whole state of the notes page as one immutable value, plus the
       pure transition function that moves it from one event to the next.
How:   Views never mutate anything. The controller feeds events through
       `reduce(state, event)` and the page is rendered from the result.

State Machine (phase):
    ┌─────────┐ NotesLoaded ┌─────────┐
    │ LOADING │────────────▶│  READY  │◀─┐ NotesLoaded (retry)
    └─────────┘             └─────────┘  │
         │ LoadFailed                    │
         ▼                               │
    ┌─────────┐──────────────────────────┘
    │ FAILED  │
    └─────────┘

    Within READY, at most one of `form` / `delete` is open at a time:
        OpenCreateForm / OpenEditForm → form open, delete dialog closed
        OpenDeleteDialog              → delete dialog open, form closed
        NoteCreated / NoteUpdated     → list patched, form closed
        FormRejected                  → form stays open with the error
        NoteDeleted                   → note removed, dialog closed
        DeleteFailed                  → dialog stays open with the error
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

FORM_INCOMPLETE_MESSAGE = "Please fill in both title and content"


class Phase(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class NoteView:
    """A note as the page shows it, built from the API's JSON."""
    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "NoteView":
        return cls(
            id=str(data["id"]),
            title=data["title"],
            content=data["content"],
            created_at=datetime.fromisoformat(data["createdAt"]),
            updated_at=datetime.fromisoformat(data["updatedAt"]),
        )


@dataclass(frozen=True)
class NoteForm:
    """The create/edit form. `note_id` is None while creating."""
    note_id: Optional[str] = None
    title: str = ""
    content: str = ""
    error: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.note_id is not None


@dataclass(frozen=True)
class DeleteDialog:
    """Confirmation dialog for deleting `note`."""
    note: NoteView
    error: Optional[str] = None


@dataclass(frozen=True)
class UIState:
    phase: Phase = Phase.LOADING
    notes: Tuple[NoteView, ...] = ()
    error: Optional[str] = None
    form: Optional[NoteForm] = None
    delete: Optional[DeleteDialog] = None

    def find(self, note_id: str) -> Optional[NoteView]:
        return next((note for note in self.notes if note.id == note_id), None)


# ══════════════════════════════════════════════════════════════════════════
# Events
# ══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class NotesLoaded:
    notes: Tuple[NoteView, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class LoadFailed:
    message: str


@dataclass(frozen=True)
class OpenCreateForm:
    pass


@dataclass(frozen=True)
class OpenEditForm:
    note_id: str


@dataclass(frozen=True)
class CloseForm:
    pass


@dataclass(frozen=True)
class FormRejected:
    """Submission failed; keep what the user typed and show why."""
    title: str
    content: str
    message: str


@dataclass(frozen=True)
class NoteCreated:
    note: NoteView


@dataclass(frozen=True)
class NoteUpdated:
    note: NoteView


@dataclass(frozen=True)
class OpenDeleteDialog:
    note_id: str


@dataclass(frozen=True)
class CloseDeleteDialog:
    pass


@dataclass(frozen=True)
class NoteDeleted:
    note_id: str


@dataclass(frozen=True)
class DeleteFailed:
    message: str


def validate_form(title: str, content: str) -> Optional[str]:
    """Client-side check; the server validates again on submit."""
    if not title.strip() or not content.strip():
        return FORM_INCOMPLETE_MESSAGE
    return None


def reduce(state: UIState, event: object) -> UIState:
    """
    Return the state that follows `event`.

    Events that do not apply to the current state (editing a note that is
    not in the list, closing a dialog that is not open) leave it unchanged.
    """
    if isinstance(event, NotesLoaded):
        return replace(state, phase=Phase.READY, notes=tuple(event.notes), error=None)

    if isinstance(event, LoadFailed):
        return replace(state, phase=Phase.FAILED, error=event.message)

    if isinstance(event, OpenCreateForm):
        return replace(state, form=NoteForm(), delete=None)

    if isinstance(event, OpenEditForm):
        note = state.find(event.note_id)
        if note is None:
            return state
        return replace(
            state,
            form=NoteForm(note_id=note.id, title=note.title, content=note.content),
            delete=None,
        )

    if isinstance(event, CloseForm):
        return replace(state, form=None)

    if isinstance(event, FormRejected):
        if state.form is None:
            return state
        return replace(
            state,
            form=replace(state.form, title=event.title, content=event.content, error=event.message),
        )

    if isinstance(event, NoteCreated):
        return replace(state, notes=(event.note,) + state.notes, form=None)

    if isinstance(event, NoteUpdated):
        notes = tuple(event.note if note.id == event.note.id else note for note in state.notes)
        return replace(state, notes=notes, form=None)

    if isinstance(event, OpenDeleteDialog):
        note = state.find(event.note_id)
        if note is None:
            return state
        return replace(state, delete=DeleteDialog(note=note), form=None)

    if isinstance(event, CloseDeleteDialog):
        return replace(state, delete=None)

    if isinstance(event, NoteDeleted):
        notes = tuple(note for note in state.notes if note.id != event.note_id)
        return replace(state, notes=notes, delete=None)

    if isinstance(event, DeleteFailed):
        if state.delete is None:
            return state
        return replace(state, delete=replace(state.delete, error=event.message))

    raise TypeError(f"Unknown UI event: {type(event).__name__}")
