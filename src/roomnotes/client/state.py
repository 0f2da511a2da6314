"""Local view of a room.

Pure reducers over the notes and users a client currently shows. Durable
writes are applied only after the API confirms them; events relayed from
other clients are applied as received, without validation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.schemas import realtime as events

Note = Dict[str, Any]


@dataclass(frozen=True)
class Notification:
    """A non-blocking message for the user (the web client shows a toast)."""

    title: str
    description: str
    variant: str = "default"


@dataclass
class RoomState:
    room_id: str
    username: str
    notes: List[Note] = field(default_factory=list)
    users: List[Dict[str, Any]] = field(default_factory=list)
    selected_note_id: Optional[str] = None

    def find_note(self, note_id: str) -> Optional[Note]:
        return next((n for n in self.notes if n.get("id") == note_id), None)

    @property
    def selected_note(self) -> Optional[Note]:
        if self.selected_note_id is None:
            return None
        return self.find_note(self.selected_note_id)

    def select(self, note_id: Optional[str]) -> None:
        self.selected_note_id = note_id

    def set_notes(self, notes: List[Note]) -> None:
        self.notes = list(notes)

    def add_note(self, note: Note) -> None:
        self.notes.append(note)

    def replace_content(self, note_id: str, content: str, edited_by: str) -> bool:
        """Overwrite one note's content in place. False if it isn't shown."""
        for i, note in enumerate(self.notes):
            if note.get("id") == note_id:
                self.notes[i] = {**note, "content": content, "lastEditedBy": edited_by}
                return True
        return False

    def remove_note(self, note_id: str) -> None:
        self.notes = [n for n in self.notes if n.get("id") != note_id]
        if self.selected_note_id == note_id:
            self.selected_note_id = None

    def apply_event(self, event: str, data: Dict[str, Any]) -> Optional[Notification]:
        """Fold one server event into the state.

        Returns the notification to surface, or None for unknown events.
        """
        if event in (events.USER_JOINED, events.USER_LEFT):
            self.users = list(data.get("users", []))
            title = "User Joined" if event == events.USER_JOINED else "User Left"
            return Notification(title, data.get("message", ""))

        if event == events.NOTE_UPDATED:
            editor = data.get("lastEditedBy", "")
            self.replace_content(data.get("noteId"), data.get("content", ""), editor)
            return Notification("Note Updated", f"Note was updated by {editor}")

        if event == events.NOTE_CREATED:
            self.add_note(data.get("note", {}))
            return Notification("New Note Created", f"{data.get('createdBy', '')} created a new note")

        return None
