"""
Notes App — UI Controller
=========================

What:  Turns user actions into API calls and UI events.
How:   Holds the single authoritative UIState. Every action dispatches one
       or more events through `reduce`; callers render `controller.state`
       afterwards and never patch the state themselves.

Action → events:
    load()            NotesLoaded | LoadFailed
    submit(t, c)      FormRejected (client check) | NoteCreated | NoteUpdated
                      | FormRejected (server error)
    confirm_delete()  NoteDeleted | DeleteFailed
"""

import logging
from typing import Optional

from notesapp.ui.client import ApiClientError, NotesClient
from notesapp.ui.state import (
    CloseDeleteDialog,
    CloseForm,
    DeleteFailed,
    FormRejected,
    LoadFailed,
    NoteCreated,
    NoteDeleted,
    NotesLoaded,
    NoteUpdated,
    NoteView,
    OpenCreateForm,
    OpenDeleteDialog,
    OpenEditForm,
    UIState,
    reduce,
    validate_form,
)

logger = logging.getLogger(__name__)


class NotesController:
    def __init__(self, client: NotesClient, state: Optional[UIState] = None):
        self._client = client
        self._state = state or UIState()

    @property
    def state(self) -> UIState:
        return self._state

    def dispatch(self, event: object) -> UIState:
        self._state = reduce(self._state, event)
        return self._state

    async def load(self) -> UIState:
        """Fetch the list; on failure the page shows the error with a retry link."""
        try:
            data = await self._client.list_notes()
        except ApiClientError as e:
            logger.warning("Loading notes failed: %s", e.message)
            return self.dispatch(LoadFailed(e.message))
        return self.dispatch(NotesLoaded(tuple(NoteView.from_api(item) for item in data)))

    def open_create(self) -> UIState:
        return self.dispatch(OpenCreateForm())

    def open_edit(self, note_id: str) -> UIState:
        return self.dispatch(OpenEditForm(note_id))

    def close_form(self) -> UIState:
        return self.dispatch(CloseForm())

    def open_delete(self, note_id: str) -> UIState:
        return self.dispatch(OpenDeleteDialog(note_id))

    def close_delete(self) -> UIState:
        return self.dispatch(CloseDeleteDialog())

    async def submit(self, title: str, content: str) -> UIState:
        """
        Submit the open form. Blank fields are rejected locally without a
        network call; the trimmed values are what get sent.
        """
        form = self._state.form
        if form is None:
            return self._state

        problem = validate_form(title, content)
        if problem:
            return self.dispatch(FormRejected(title, content, problem))

        try:
            if form.is_editing:
                data = await self._client.update_note(form.note_id, title.strip(), content.strip())
                return self.dispatch(NoteUpdated(NoteView.from_api(data)))
            data = await self._client.create_note(title.strip(), content.strip())
            return self.dispatch(NoteCreated(NoteView.from_api(data)))
        except ApiClientError as e:
            logger.warning("Saving note failed: %s", e.message)
            return self.dispatch(FormRejected(title, content, e.message))

    async def confirm_delete(self) -> UIState:
        dialog = self._state.delete
        if dialog is None:
            return self._state

        try:
            await self._client.delete_note(dialog.note.id)
        except ApiClientError as e:
            logger.warning("Deleting note %s failed: %s", dialog.note.id, e.message)
            return self.dispatch(DeleteFailed(e.message))
        return self.dispatch(NoteDeleted(dialog.note.id))
