"""
Realtime event payloads.

Inbound payloads are checked for field presence and type only; any string
(the empty one included) is a valid room id or display name. Outbound
payloads are what every room member receives. Notes inside create events
are relayed verbatim and are not re-validated.
"""

from typing import Any, Dict, List

from .notes import CamelModel

# event names, shared with the browser client
JOIN_ROOM = "join-room"
UPDATE_NOTE = "update-note"
CREATE_NOTE = "create-note"
USER_JOINED = "user-joined"
USER_LEFT = "user-left"
NOTE_UPDATED = "note-updated"
NOTE_CREATED = "note-created"
ERROR = "error"


class JoinRoomPayload(CamelModel):
    room_id: str
    username: str


class UpdateNotePayload(CamelModel):
    room_id: str
    note_id: str
    content: str
    username: str


class CreateNotePayload(CamelModel):
    room_id: str
    note: Dict[str, Any]
    username: str


class ParticipantOut(CamelModel):
    """A room member as the client sees it; id is the connection id."""

    id: str
    username: str


class PresenceEvent(CamelModel):
    """Body of user-joined and user-left."""

    users: List[ParticipantOut]
    message: str


class NoteUpdatedEvent(CamelModel):
    note_id: str
    content: str
    last_edited_by: str


class NoteCreatedEvent(CamelModel):
    note: Dict[str, Any]
    created_by: str


class ErrorEvent(CamelModel):
    message: str
