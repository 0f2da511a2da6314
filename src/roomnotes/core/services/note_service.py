"""Note service implementation."""

import logging
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotFoundError, ValidationError
from ..repositories.note_repository import NoteRepository
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate
from .interfaces import INoteService

logger = logging.getLogger(__name__)


def _require_text(**fields: str) -> None:
    # room ids and display names made only of whitespace identify nothing
    blank = [name for name, value in fields.items() if not value.strip()]
    if blank:
        raise ValidationError(f"{', '.join(blank)} cannot be blank")


class NoteService(INoteService):
    """Note service implementation.

    Stateless apart from the request-scoped session. It never talks to the
    realtime gateway; clients announce their own writes.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)

    async def list_room_notes(self, room_id: str) -> List[NoteResponse]:
        """Notes of a room, oldest first. An unknown room is just empty."""
        notes = await self.note_repo.list_by_room(room_id)
        return [NoteResponse.model_validate(note) for note in notes]

    async def create_note(self, request: NoteCreate) -> NoteResponse:
        """Create new note; the author is also its first editor."""
        _require_text(roomId=request.room_id, createdBy=request.created_by)
        note_data = {
            "title": request.title,
            "content": request.content,
            "room_id": request.room_id,
            "created_by": request.created_by,
            "last_edited_by": request.created_by,
        }

        note = await self.note_repo.create_note(note_data)
        logger.info(f"Note {note.id} created in room '{note.room_id}' by {note.created_by}")
        return NoteResponse.model_validate(note)

    async def update_note(self, note_id: str, request: NoteUpdate) -> NoteResponse:
        """Overwrite content. Last writer wins."""
        _require_text(lastEditedBy=request.last_edited_by)
        note = await self.note_repo.update_note(
            self._parse_note_id(note_id), request.content, request.last_edited_by
        )
        if not note:
            raise NotFoundError()
        return NoteResponse.model_validate(note)

    async def delete_note(self, note_id: str) -> None:
        """Delete note; a second delete of the same id is NotFound."""
        deleted = await self.note_repo.delete_note(self._parse_note_id(note_id))
        if not deleted:
            raise NotFoundError()

    @staticmethod
    def _parse_note_id(note_id: str) -> UUID:
        # malformed ids can't name an existing note
        try:
            return UUID(str(note_id))
        except ValueError:
            raise NotFoundError() from None
