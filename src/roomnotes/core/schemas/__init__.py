"""
Pydantic schemas for the HTTP API and the realtime channel.
"""

from .common import ErrorResponse, HealthCheckResponse, MessageResponse
from .notes import NoteCreate, NoteResponse, NoteUpdate
from .realtime import (
    CreateNotePayload,
    JoinRoomPayload,
    NoteCreatedEvent,
    NoteUpdatedEvent,
    ParticipantOut,
    PresenceEvent,
    UpdateNotePayload,
)

__all__ = [
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    # Realtime schemas
    "JoinRoomPayload",
    "UpdateNotePayload",
    "CreateNotePayload",
    "ParticipantOut",
    "PresenceEvent",
    "NoteUpdatedEvent",
    "NoteCreatedEvent",
    # Common schemas
    "ErrorResponse",
    "MessageResponse",
    "HealthCheckResponse",
]
