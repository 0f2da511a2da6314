"""Socket.IO event handlers for room presence and note relays.

The gateway is a pure relay: it never reads or writes the note store.
Clients persist through the HTTP API first and then announce the change
here so the other members of the room can update.
"""

from __future__ import annotations

from typing import Any, Optional

import socketio
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..logging import get_logger
from ..schemas import realtime as events
from .registry import Departure, Participant, RoomRegistry

logger = get_logger("realtime.gateway")


def _presence(participants: list[Participant], message: str) -> dict[str, Any]:
    return events.PresenceEvent(
        users=[events.ParticipantOut(**p.to_wire()) for p in participants],
        message=message,
    ).model_dump(by_alias=True)


class RealtimeGateway:
    """Binds the room registry to a python-socketio server.

    Connection lifecycle: connected (unjoined) -> joined(room, username) ->
    closed. Only joined connections produce a user-left broadcast.
    """

    def __init__(self, sio: socketio.AsyncServer, registry: RoomRegistry):
        self.sio = sio
        self.registry = registry

    def register(self) -> None:
        """Attach the handlers to the server."""
        self.sio.on("connect", self.on_connect)
        self.sio.on("disconnect", self.on_disconnect)
        self.sio.on(events.JOIN_ROOM, self.on_join_room)
        self.sio.on(events.UPDATE_NOTE, self.on_update_note)
        self.sio.on(events.CREATE_NOTE, self.on_create_note)

    async def on_connect(self, sid: str, environ: dict, auth: Any = None) -> None:
        logger.debug(f"Socket connected: {sid}")

    async def on_disconnect(self, sid: str, reason: Any = None) -> None:
        departure = await self.registry.leave(sid)
        if departure is None:
            logger.debug(f"Unjoined socket disconnected: {sid}")
            return
        await self._announce_departure(departure, sid)

    async def on_join_room(self, sid: str, data: Any) -> None:
        payload = await self._parse(sid, events.JoinRoomPayload, data, events.JOIN_ROOM)
        if payload is None:
            return

        participants, departure = await self.registry.join(
            payload.room_id, sid, payload.username
        )
        if departure is not None:
            await self.sio.leave_room(sid, departure.room_id)
            await self._announce_departure(departure, sid)

        await self.sio.enter_room(sid, payload.room_id)
        logger.info(
            f"{payload.username} joined room '{payload.room_id}'",
            extra={"sid": sid, "room_id": payload.room_id, "participants": len(participants)},
        )
        # the joiner gets it too, that's how it learns the member list
        await self.sio.emit(
            events.USER_JOINED,
            _presence(participants, f"{payload.username} joined the room"),
            room=payload.room_id,
        )

    async def on_update_note(self, sid: str, data: Any) -> None:
        payload = await self._parse(sid, events.UpdateNotePayload, data, events.UPDATE_NOTE)
        if payload is None:
            return

        body = events.NoteUpdatedEvent(
            note_id=payload.note_id,
            content=payload.content,
            last_edited_by=payload.username,
        ).model_dump(by_alias=True)
        logger.debug(f"Relaying update of note {payload.note_id} to room '{payload.room_id}'")
        await self.sio.emit(events.NOTE_UPDATED, body, room=payload.room_id, skip_sid=sid)

    async def on_create_note(self, sid: str, data: Any) -> None:
        payload = await self._parse(sid, events.CreateNotePayload, data, events.CREATE_NOTE)
        if payload is None:
            return

        body = events.NoteCreatedEvent(
            note=payload.note, created_by=payload.username
        ).model_dump(by_alias=True)
        logger.debug(f"Relaying new note to room '{payload.room_id}'")
        await self.sio.emit(events.NOTE_CREATED, body, room=payload.room_id, skip_sid=sid)

    async def _announce_departure(self, departure: Departure, sid: str) -> None:
        username = departure.participant.username
        logger.info(
            f"{username} left room '{departure.room_id}'",
            extra={"sid": sid, "room_id": departure.room_id, "participants": len(departure.remaining)},
        )
        if not departure.remaining:
            return
        await self.sio.emit(
            events.USER_LEFT,
            _presence(departure.remaining, f"{username} left the room"),
            room=departure.room_id,
            skip_sid=sid,
        )

    async def _parse(
        self, sid: str, model: type[BaseModel], data: Any, event: str
    ) -> Optional[Any]:
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            logger.warning(
                f"Dropping malformed '{event}' event",
                extra={"sid": sid, "error_count": e.error_count()},
            )
            await self.sio.emit(
                events.ERROR,
                events.ErrorEvent(message=f"Invalid '{event}' payload").model_dump(),
                to=sid,
            )
            return None
