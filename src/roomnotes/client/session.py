"""A client's membership in one room.

Every durable action goes through the HTTP API first; local state changes
only once the API call succeeds, and only then is the change announced on
the realtime channel. The two steps can fail independently.
"""

import logging
from typing import Any, Callable, Dict, Optional

import httpx
import socketio

from ..core.schemas import realtime as events
from .api import ApiError, NotesApiClient
from .identity import IdentityStore
from .state import Note, Notification, RoomState

logger = logging.getLogger(__name__)

Notifier = Callable[[Notification], None]


def log_notification(notification: Notification) -> None:
    level = logging.WARNING if notification.variant == "destructive" else logging.INFO
    logger.log(level, f"{notification.title}: {notification.description}")


class RoomSession:
    """
    Usage:
        session = RoomSession.from_identity("http://localhost:5000", "team-alpha")
        await session.open()
        await session.create_note("Agenda", "- intro")
        ...
        await session.close()
    """

    def __init__(
        self,
        server_url: str,
        room_id: str,
        username: str,
        api: Optional[NotesApiClient] = None,
        sio: Optional[socketio.AsyncClient] = None,
        notify: Optional[Notifier] = None,
        socketio_path: str = "socket.io",
    ):
        self.server_url = server_url
        self.socketio_path = socketio_path
        self.state = RoomState(room_id=room_id, username=username)
        self.api = api or NotesApiClient(server_url)
        self.sio = sio or socketio.AsyncClient()
        self.notify = notify or log_notification
        self._register_handlers()

    @classmethod
    def from_identity(
        cls, server_url: str, room_id: str, identity: Optional[IdentityStore] = None, **kwargs: Any
    ) -> "RoomSession":
        """Build a session for the stored username (MissingIdentityError if none)."""
        username = (identity or IdentityStore()).require()
        return cls(server_url, room_id, username, **kwargs)

    @property
    def room_id(self) -> str:
        return self.state.room_id

    @property
    def username(self) -> str:
        return self.state.username

    def _register_handlers(self) -> None:
        self.sio.on("connect", self._on_connect)
        for event in (events.USER_JOINED, events.USER_LEFT, events.NOTE_UPDATED, events.NOTE_CREATED):
            self.sio.on(event, self._event_handler(event))
        self.sio.on(events.ERROR, self._on_server_error)

    def _event_handler(self, event: str):
        async def handler(data: Dict[str, Any]) -> None:
            self.handle_event(event, data)

        return handler

    def handle_event(self, event: str, data: Dict[str, Any]) -> None:
        notification = self.state.apply_event(event, data)
        if notification is not None:
            self.notify(notification)

    async def _on_connect(self) -> None:
        # joins again after an automatic reconnect too
        await self.sio.emit(events.JOIN_ROOM, {"roomId": self.room_id, "username": self.username})

    async def _on_server_error(self, data: Dict[str, Any]) -> None:
        logger.warning(f"Realtime error from server: {data.get('message')}")

    async def open(self) -> None:
        """Load the room's notes and connect to the realtime channel."""
        await self.fetch_notes()
        await self.sio.connect(self.server_url, socketio_path=self.socketio_path)

    async def close(self) -> None:
        if self.sio.connected:
            await self.sio.disconnect()
        await self.api.close()

    async def fetch_notes(self) -> None:
        try:
            notes = await self.api.list_room_notes(self.room_id)
        except (ApiError, httpx.HTTPError) as e:
            self._failed("Error fetching notes", "Failed to fetch notes", e)
            return
        self.state.set_notes(notes)

    async def create_note(self, title: str, content: str) -> Optional[Note]:
        try:
            note = await self.api.create_note(title, content, self.room_id, self.username)
        except (ApiError, httpx.HTTPError) as e:
            self._failed("Error creating note", "Failed to create note", e)
            return None

        self.state.add_note(note)
        self.state.select(note.get("id"))
        await self._announce(
            events.CREATE_NOTE, {"roomId": self.room_id, "note": note, "username": self.username}
        )
        return note

    async def update_note(self, note_id: str, content: str) -> bool:
        try:
            await self.api.update_note(note_id, content, self.username)
        except (ApiError, httpx.HTTPError) as e:
            self._failed("Error updating note", "Failed to update note", e)
            return False

        self.state.replace_content(note_id, content, self.username)
        await self._announce(
            events.UPDATE_NOTE,
            {"roomId": self.room_id, "noteId": note_id, "content": content, "username": self.username},
        )
        return True

    async def delete_note(self, note_id: str) -> bool:
        try:
            await self.api.delete_note(note_id)
        except ApiError as e:
            if not e.is_not_found:
                self._failed("Error deleting note", "Failed to delete note", e)
                return False
            # someone else already deleted it; same end result
            logger.info(f"Note {note_id} was already deleted")
        except httpx.HTTPError as e:
            self._failed("Error deleting note", "Failed to delete note", e)
            return False

        self.state.remove_note(note_id)
        self.notify(Notification("Success", "Note deleted successfully"))
        return True

    async def _announce(self, event: str, payload: Dict[str, Any]) -> None:
        # fire-and-forget; the durable write already happened
        if not self.sio.connected:
            logger.debug(f"Not connected, skipping '{event}' announcement")
            return
        await self.sio.emit(event, payload)

    def _failed(self, log_message: str, description: str, error: Exception) -> None:
        logger.error(f"{log_message}: {error}")
        self.notify(Notification("Error", description, variant="destructive"))
