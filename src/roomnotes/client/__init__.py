"""Python client for RoomNotes: API access, local room state, live sync."""

from .api import ApiError, NotesApiClient
from .identity import IdentityStore, MissingIdentityError
from .session import RoomSession
from .state import Notification, RoomState

__all__ = [
    "ApiError",
    "NotesApiClient",
    "IdentityStore",
    "MissingIdentityError",
    "RoomSession",
    "Notification",
    "RoomState",
]
