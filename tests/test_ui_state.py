"""
Notes App — UI State Reducer Tests
==================================

What:  Transitions of UIState under every event.
"""

from datetime import datetime, timezone

import pytest

from notesapp.ui.state import (
    FORM_INCOMPLETE_MESSAGE,
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
    Phase,
    UIState,
    reduce,
    validate_form,
)

STAMP = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


def note(note_id: str, title: str = "title", content: str = "content") -> NoteView:
    return NoteView(id=note_id, title=title, content=content, created_at=STAMP, updated_at=STAMP)


def ready(*notes: NoteView) -> UIState:
    return reduce(UIState(), NotesLoaded(tuple(notes)))


class TestLoading:
    def test_initial_state_is_loading(self):
        state = UIState()
        assert state.phase is Phase.LOADING
        assert state.notes == ()

    def test_loaded(self):
        state = ready(note("1"), note("2"))
        assert state.phase is Phase.READY
        assert [n.id for n in state.notes] == ["1", "2"]

    def test_load_failed_then_retry(self):
        failed = reduce(UIState(), LoadFailed("Failed to fetch notes"))
        assert failed.phase is Phase.FAILED
        assert failed.error == "Failed to fetch notes"

        retried = reduce(failed, NotesLoaded((note("1"),)))
        assert retried.phase is Phase.READY
        assert retried.error is None

    def test_from_api(self):
        view = NoteView.from_api({
            "id": "abc",
            "title": "T",
            "content": "C",
            "createdAt": "2024-01-15T12:00:00+00:00",
            "updatedAt": "2024-01-16T12:00:00+00:00",
        })
        assert view.created_at == STAMP
        assert view.updated_at > view.created_at


class TestForm:
    def test_open_create(self):
        state = reduce(ready(), OpenCreateForm())
        assert state.form is not None
        assert not state.form.is_editing
        assert (state.form.title, state.form.content) == ("", "")

    def test_open_edit_prefills(self):
        state = reduce(ready(note("1", "Groceries", "Milk")), OpenEditForm("1"))
        assert state.form.is_editing
        assert (state.form.note_id, state.form.title, state.form.content) == ("1", "Groceries", "Milk")

    def test_open_edit_unknown_note_ignored(self):
        start = ready(note("1"))
        assert reduce(start, OpenEditForm("missing")) == start

    def test_rejected_keeps_form_open_with_input(self):
        state = reduce(reduce(ready(), OpenCreateForm()), FormRejected("A", "", FORM_INCOMPLETE_MESSAGE))
        assert state.form.error == FORM_INCOMPLETE_MESSAGE
        assert state.form.title == "A"

    def test_rejected_without_form_ignored(self):
        start = ready()
        assert reduce(start, FormRejected("A", "B", "boom")) == start

    def test_created_prepends_and_closes(self):
        state = reduce(ready(note("old")), OpenCreateForm())
        state = reduce(state, NoteCreated(note("new")))
        assert [n.id for n in state.notes] == ["new", "old"]
        assert state.form is None

    def test_updated_replaces_in_place_and_closes(self):
        state = reduce(ready(note("1"), note("2", "before")), OpenEditForm("2"))
        state = reduce(state, NoteUpdated(note("2", "after")))
        assert [n.title for n in state.notes] == ["title", "after"]
        assert state.form is None

    def test_close_form(self):
        state = reduce(reduce(ready(), OpenCreateForm()), CloseForm())
        assert state.form is None


class TestDeleteDialog:
    def test_open_and_cancel(self):
        state = reduce(ready(note("1")), OpenDeleteDialog("1"))
        assert state.delete.note.id == "1"
        assert reduce(state, CloseDeleteDialog()).delete is None

    def test_deleted_removes_and_closes(self):
        state = reduce(ready(note("1"), note("2")), OpenDeleteDialog("1"))
        state = reduce(state, NoteDeleted("1"))
        assert [n.id for n in state.notes] == ["2"]
        assert state.delete is None

    def test_failure_keeps_dialog_open(self):
        state = reduce(ready(note("1")), OpenDeleteDialog("1"))
        state = reduce(state, DeleteFailed("Note not found"))
        assert state.delete.error == "Note not found"
        assert [n.id for n in state.notes] == ["1"]

    def test_form_and_dialog_are_exclusive(self):
        state = reduce(ready(note("1")), OpenDeleteDialog("1"))
        state = reduce(state, OpenEditForm("1"))
        assert state.delete is None and state.form is not None

        state = reduce(state, OpenDeleteDialog("1"))
        assert state.form is None and state.delete is not None


def test_unknown_event_rejected():
    with pytest.raises(TypeError):
        reduce(UIState(), object())


@pytest.mark.parametrize(
    "title, content, expected",
    [("A", "B", None), ("", "B", FORM_INCOMPLETE_MESSAGE), ("A", "  ", FORM_INCOMPLETE_MESSAGE)],
)
def test_validate_form(title, content, expected):
    assert validate_form(title, content) == expected
