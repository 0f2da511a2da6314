"""
Database models for RoomNotes.

SQLAlchemy ORM models for the note store. Rooms and participants are
not persisted; only notes are.
"""

from .base import BaseModel
from .note import Note

__all__ = [
    "BaseModel",
    "Note",
]
