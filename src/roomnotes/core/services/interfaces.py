"""
Service interfaces for RoomNotes.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..schemas.common import HealthCheckResponse
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate


class INoteService(ABC):
    """Note service for room-scoped CRUD operations."""

    @abstractmethod
    async def list_room_notes(self, room_id: str) -> List[NoteResponse]:
        """List every note of a room in insertion order."""
        pass

    @abstractmethod
    async def create_note(self, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        pass

    @abstractmethod
    async def update_note(self, note_id: str, request: NoteUpdate) -> NoteResponse:
        """Replace note content and editor."""
        pass

    @abstractmethod
    async def delete_note(self, note_id: str) -> None:
        """Delete note."""
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get overall health status."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check database connectivity."""
        pass

    @abstractmethod
    async def check_realtime_health(self) -> Dict[str, Any]:
        """Report room presence figures."""
        pass
