"""In-memory room presence.

Lives for the lifetime of the process: empty at start, changed only by
join/leave, never persisted. A single-process deployment is assumed.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Participant:
    """A joined connection and the display name it chose."""

    connection_id: str
    username: str

    def to_wire(self) -> dict:
        return {"id": self.connection_id, "username": self.username}


@dataclass(frozen=True)
class Departure:
    """Result of removing a connection from its room."""

    room_id: str
    participant: Participant
    remaining: List[Participant]


class RoomRegistry:
    """Maps room id -> participants, and connection id -> room id.

    Rooms are materialised on first join and dropped when their last
    participant leaves; asking about an unknown room yields an empty list.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        # dicts keep join order
        self._rooms: Dict[str, Dict[str, Participant]] = {}
        self._connections: Dict[str, str] = {}

    async def join(
        self, room_id: str, connection_id: str, username: str
    ) -> Tuple[List[Participant], Optional[Departure]]:
        """Add a connection to a room.

        A connection belongs to at most one room; if it was already in a
        different room it is moved, and the departure from the old room is
        returned alongside the new participant list. Re-joining the same
        room only updates the username.
        """
        async with self._lock:
            departure = None
            previous_room = self._connections.get(connection_id)
            if previous_room is not None and previous_room != room_id:
                departure = self._remove(connection_id)

            members = self._rooms.setdefault(room_id, {})
            members[connection_id] = Participant(connection_id, username)
            self._connections[connection_id] = room_id
            return list(members.values()), departure

    async def leave(self, connection_id: str) -> Optional[Departure]:
        """Remove a connection. None if it never joined a room."""
        async with self._lock:
            return self._remove(connection_id)

    def _remove(self, connection_id: str) -> Optional[Departure]:
        room_id = self._connections.pop(connection_id, None)
        if room_id is None:
            return None

        members = self._rooms.get(room_id, {})
        participant = members.pop(connection_id)
        if not members:
            self._rooms.pop(room_id, None)
        return Departure(room_id, participant, list(members.values()))

    def participants(self, room_id: str) -> List[Participant]:
        return list(self._rooms.get(room_id, {}).values())

    def room_of(self, connection_id: str) -> Optional[str]:
        return self._connections.get(connection_id)

    def participant(self, connection_id: str) -> Optional[Participant]:
        room_id = self._connections.get(connection_id)
        if room_id is None:
            return None
        return self._rooms[room_id].get(connection_id)

    def snapshot(self) -> Dict[str, int]:
        """Room id -> participant count."""
        return {room_id: len(members) for room_id, members in self._rooms.items()}

    def clear(self) -> None:
        self._rooms.clear()
        self._connections.clear()


# Singleton instance
_room_registry: Optional[RoomRegistry] = None


def get_room_registry() -> RoomRegistry:
    """Get the process-wide registry."""
    global _room_registry
    if _room_registry is None:
        _room_registry = RoomRegistry()
    return _room_registry
