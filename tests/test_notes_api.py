"""
Notes App — /api/notes Endpoint Tests
=====================================

What:  The HTTP contract: status codes, bodies, ordering.
How:   Real app over httpx ASGITransport, backed by a temporary SQLite file.
"""

from datetime import datetime
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from notesapp.exceptions import DatabaseError

NOTES = "/api/notes"


async def create(client, title="A", content="B"):
    response = await client.post(NOTES, json={"title": title, "content": content})
    assert response.status_code == 201, response.text
    return response.json()


class TestNoteLifecycle:
    @pytest.mark.asyncio
    async def test_create_get_update_delete_scenario(self, test_client):
        created = await create(test_client, "A", "B")
        note_id = created["id"]
        assert set(created) == {"id", "title", "content", "createdAt", "updatedAt"}
        assert created["title"] == "A"
        assert created["content"] == "B"
        assert created["createdAt"] == created["updatedAt"]

        fetched = await test_client.get(NOTES, params={"id": note_id})
        assert fetched.status_code == 200
        assert fetched.json() == created

        updated = await test_client.put(NOTES, params={"id": note_id}, json={"title": "A2", "content": "B2"})
        assert updated.status_code == 200
        body = updated.json()
        assert body["id"] == note_id
        assert body["title"] == "A2"
        assert body["content"] == "B2"
        assert body["createdAt"] == created["createdAt"]
        assert datetime.fromisoformat(body["updatedAt"]) >= datetime.fromisoformat(created["updatedAt"])

        deleted = await test_client.delete(NOTES, params={"id": note_id})
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Note deleted successfully"}

        gone = await test_client.get(NOTES, params={"id": note_id})
        assert gone.status_code == 404
        assert gone.json() == {"error": "Note not found"}

    @pytest.mark.asyncio
    async def test_create_trims_fields(self, test_client):
        created = await create(test_client, "  Padded title ", "\n padded body \n")

        fetched = (await test_client.get(NOTES, params={"id": created["id"]})).json()
        assert fetched["title"] == "Padded title"
        assert fetched["content"] == "padded body"

    @pytest.mark.asyncio
    async def test_timestamps_are_utc_iso(self, test_client):
        created = await create(test_client)
        stamp = datetime.fromisoformat(created["createdAt"])
        assert stamp.utcoffset().total_seconds() == 0


class TestListNotes:
    @pytest.mark.asyncio
    async def test_empty_list(self, test_client):
        response = await test_client.get(NOTES)
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_newest_first(self, test_client):
        first = await create(test_client, "first", "1")
        second = await create(test_client, "second", "2")
        third = await create(test_client, "third", "3")

        listed = (await test_client.get(NOTES)).json()

        assert [note["id"] for note in listed] == [third["id"], second["id"], first["id"]]

    @pytest.mark.asyncio
    async def test_empty_id_lists_everything(self, test_client):
        await create(test_client)
        response = await test_client.get(NOTES, params={"id": ""})
        assert response.status_code == 200
        assert isinstance(response.json(), list)

    @pytest.mark.asyncio
    async def test_store_failure_is_500(self, test_client):
        with patch(
            "notesapp.routes.notes.note_service.list_notes",
            AsyncMock(side_effect=DatabaseError(message="Failed to fetch notes")),
        ):
            response = await test_client.get(NOTES)
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch notes"}


class TestCreateValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"title": "", "content": "B"},
            {"title": "A", "content": "   "},
            {"title": "A"},
            {"content": "B"},
            {},
            {"title": 5, "content": "B"},
        ],
    )
    async def test_rejected_and_nothing_stored(self, test_client, body):
        response = await test_client.post(NOTES, json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Title and content are required"}
        assert (await test_client.get(NOTES)).json() == []

    @pytest.mark.asyncio
    async def test_missing_body(self, test_client):
        response = await test_client.post(NOTES)
        assert response.status_code == 400
        assert response.json() == {"error": "Title and content are required"}

    @pytest.mark.asyncio
    async def test_invalid_json(self, test_client):
        response = await test_client.post(
            NOTES,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON body"}

    @pytest.mark.asyncio
    async def test_title_too_long(self, test_client):
        response = await test_client.post(NOTES, json={"title": "x" * 101, "content": "B"})
        assert response.status_code == 400
        assert response.json() == {"error": "Title cannot be more than 100 characters"}


class TestUpdateNote:
    @pytest.mark.asyncio
    async def test_missing_id(self, test_client):
        response = await test_client.put(NOTES, json={"title": "A", "content": "B"})
        assert response.status_code == 400
        assert response.json() == {"error": "Note ID is required"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "request_kwargs",
        [
            {"json": {"title": 5}},
            {"content": b"{bad", "headers": {"Content-Type": "application/json"}},
            {},
        ],
    )
    async def test_missing_id_reported_before_body(self, test_client, request_kwargs):
        response = await test_client.put(NOTES, **request_kwargs)
        assert response.status_code == 400
        assert response.json() == {"error": "Note ID is required"}

    @pytest.mark.asyncio
    async def test_invalid_json(self, test_client):
        created = await create(test_client)

        response = await test_client.put(
            NOTES,
            params={"id": created["id"]},
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON body"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b"", b"null", b'{"title": 5, "content": "B"}', b'["A", "B"]'])
    async def test_unusable_body_leaves_note_unchanged(self, test_client, body):
        created = await create(test_client, "keep", "me")

        response = await test_client.put(
            NOTES,
            params={"id": created["id"]},
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Title and content are required"}
        assert (await test_client.get(NOTES, params={"id": created["id"]})).json() == created

    @pytest.mark.asyncio
    async def test_blank_fields_leave_note_unchanged(self, test_client):
        created = await create(test_client, "keep", "me")

        response = await test_client.put(NOTES, params={"id": created["id"]}, json={"title": " ", "content": "x"})

        assert response.status_code == 400
        assert response.json() == {"error": "Title and content are required"}
        fetched = (await test_client.get(NOTES, params={"id": created["id"]})).json()
        assert fetched == created

    @pytest.mark.asyncio
    async def test_unknown_id(self, test_client):
        response = await test_client.put(NOTES, params={"id": str(uuid4())}, json={"title": "A", "content": "B"})
        assert response.status_code == 404
        assert response.json() == {"error": "Note not found"}

    @pytest.mark.asyncio
    async def test_malformed_id(self, test_client):
        response = await test_client.put(NOTES, params={"id": "nope"}, json={"title": "A", "content": "B"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_keeps_list_position(self, test_client):
        older = await create(test_client, "older", "1")
        newer = await create(test_client, "newer", "2")

        await test_client.put(NOTES, params={"id": older["id"]}, json={"title": "older v2", "content": "1"})

        listed = (await test_client.get(NOTES)).json()
        assert [note["id"] for note in listed] == [newer["id"], older["id"]]


class TestDeleteNote:
    @pytest.mark.asyncio
    async def test_missing_id(self, test_client):
        response = await test_client.delete(NOTES)
        assert response.status_code == 400
        assert response.json() == {"error": "Note ID is required"}

    @pytest.mark.asyncio
    async def test_second_delete_is_not_found(self, test_client):
        created = await create(test_client)

        assert (await test_client.delete(NOTES, params={"id": created["id"]})).status_code == 200
        again = await test_client.delete(NOTES, params={"id": created["id"]})

        assert again.status_code == 404
        assert again.json() == {"error": "Note not found"}

    @pytest.mark.asyncio
    async def test_delete_only_removes_target(self, test_client):
        keep = await create(test_client, "keep", "1")
        drop = await create(test_client, "drop", "2")

        await test_client.delete(NOTES, params={"id": drop["id"]})

        assert [note["id"] for note in (await test_client.get(NOTES)).json()] == [keep["id"]]


class TestAmbient:
    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get(NOTES, headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get(NOTES)
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
