"""
Notes App — API Client
======================

What:  Thin async client for /api/notes used by the UI.
How:   Wraps an httpx.AsyncClient. Non-2xx responses raise ApiClientError
       carrying the server's `error` text; transport failures raise it with a
       generic message. Successful calls return decoded JSON.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

NOTES_PATH = "/api/notes"
UNREACHABLE_MESSAGE = "Unable to reach the notes service"


class ApiClientError(Exception):
    """A call to the notes API failed; `message` is safe to show to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotesClient:
    def __init__(self, http: httpx.AsyncClient):
        self._http = http

    async def _request(
        self,
        method: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        try:
            response = await self._http.request(method, NOTES_PATH, params=params, json=json)
        except httpx.HTTPError as e:
            logger.error("Notes API %s failed: %s", method, str(e))
            raise ApiClientError(UNREACHABLE_MESSAGE)

        if response.is_success:
            return response.json()

        try:
            message = response.json().get("error")
        except (ValueError, AttributeError):
            message = None
        raise ApiClientError(
            message or f"Request failed ({response.status_code})",
            status_code=response.status_code,
        )

    async def list_notes(self) -> List[Dict[str, Any]]:
        return await self._request("GET")

    async def get_note(self, note_id: str) -> Dict[str, Any]:
        return await self._request("GET", params={"id": note_id})

    async def create_note(self, title: str, content: str) -> Dict[str, Any]:
        return await self._request("POST", json={"title": title, "content": content})

    async def update_note(self, note_id: str, title: str, content: str) -> Dict[str, Any]:
        return await self._request(
            "PUT",
            params={"id": note_id},
            json={"title": title, "content": content},
        )

    async def delete_note(self, note_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", params={"id": note_id})
