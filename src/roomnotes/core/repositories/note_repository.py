"""Note repository for database operations."""

import logging
from typing import List, NoReturn, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import StoreError
from ..models.base import utcnow
from ..models.note import Note

logger = logging.getLogger(__name__)


class NoteRepository:
    """Repository for note database operations.

    Every mutation commits immediately. Driver/ORM failures are rolled back
    and surfaced as StoreError.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_note(self, note_data: dict) -> Note:
        """Create new note."""
        note = Note(**note_data)
        try:
            self.session.add(note)
            await self.session.commit()
            await self.session.refresh(note)
        except SQLAlchemyError as e:
            await self._rollback("create", e)
        return note

    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        """Get note by ID."""
        stmt = select(Note).where(Note.id == note_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            await self._rollback("get", e)
        return result.scalar_one_or_none()

    async def list_by_room(self, room_id: str) -> List[Note]:
        """All notes of a room, oldest first."""
        stmt = (
            select(Note)
            .where(Note.room_id == room_id)
            .order_by(Note.created_at.asc(), Note.id.asc())
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            await self._rollback("list", e)
        return list(result.scalars().all())

    async def update_note(self, note_id: UUID, content: str, edited_by: str) -> Optional[Note]:
        """Overwrite content and editor. Returns None if the note is gone."""
        note = await self.get_by_id(note_id)
        if not note:
            return None

        note.apply_edit(content, edited_by)
        # content may be unchanged, so bump explicitly rather than rely on onupdate
        note.updated_at = utcnow()
        try:
            await self.session.commit()
            await self.session.refresh(note)
        except SQLAlchemyError as e:
            await self._rollback("update", e)
        return note

    async def delete_note(self, note_id: UUID) -> bool:
        """Delete note. False if it does not exist."""
        note = await self.get_by_id(note_id)
        if not note:
            logger.warning(f"Note {note_id} not found for deletion")
            return False

        try:
            await self.session.delete(note)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._rollback("delete", e)

        logger.info(f"Deleted note {note_id}")
        return True

    async def _rollback(self, operation: str, error: SQLAlchemyError) -> NoReturn:
        logger.error(f"Note store {operation} failed: {error}")
        try:
            await self.session.rollback()
        except SQLAlchemyError as rollback_error:
            logger.error(f"Rollback after failed {operation} also failed: {rollback_error}")
        raise StoreError(f"Note store unavailable during {operation}") from error
