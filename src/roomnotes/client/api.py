"""
HTTP client for the notes API.

Thin wrapper over ``httpx.AsyncClient``. Responses are returned as the
JSON dicts the server sends; non-2xx responses raise ApiError carrying the
server's ``message``.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-success response from the notes API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class NotesApiClient:
    """
    Usage:
        async with NotesApiClient("http://localhost:5000") as api:
            notes = await api.list_room_notes("team-alpha")
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    async def __aenter__(self) -> "NotesApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if not self._client.is_closed:
            await self._client.aclose()

    async def list_room_notes(self, room_id: str) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/api/notes/room/{room_id}")

    async def create_note(
        self, title: str, content: str, room_id: str, created_by: str
    ) -> Dict[str, Any]:
        body = {"title": title, "content": content, "roomId": room_id, "createdBy": created_by}
        return await self._request("POST", "/api/notes", json=body)

    async def update_note(self, note_id: str, content: str, last_edited_by: str) -> Dict[str, Any]:
        body = {"content": content, "lastEditedBy": last_edited_by}
        return await self._request("PUT", f"/api/notes/{note_id}", json=body)

    async def delete_note(self, note_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/api/notes/{note_id}")

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        logger.debug(f"API request {method} {path}")
        response = await self._client.request(method, path, **kwargs)
        if response.is_success:
            return response.json()

        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and data.get("message"):
            message = data["message"]
        else:
            message = response.text or response.reason_phrase
        logger.debug(f"API error {method} {path}: {response.status_code} {message}")
        raise ApiError(response.status_code, message)
