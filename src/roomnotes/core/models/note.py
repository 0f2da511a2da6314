# Note model - shared text scoped to a room
from sqlalchemy import CheckConstraint, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from .base import BaseModel


class Note(BaseModel):
    """A shared note; belongs to exactly one room for its whole life."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    room_id: Mapped[str] = mapped_column(String(255), nullable=False)

    # plain display names, there are no user accounts
    created_by: Mapped[str] = mapped_column(String(100), nullable=False)
    last_edited_by: Mapped[str] = mapped_column(String(100), nullable=False)

    __table_args__ = (
        Index("idx_notes_room_id", "room_id"),
        Index("idx_notes_room_created", "room_id", "created_at"),
        CheckConstraint("length(title) <= 200", name="ck_notes_title_len"),
    )

    @validates("room_id")
    def _room_id_immutable(self, key, value):
        current = self.__dict__.get("room_id")
        if current is not None and current != value:
            raise ValueError("room_id cannot change after creation")
        return value

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', room_id='{self.room_id}')>"

    def apply_edit(self, content: str, edited_by: str) -> None:
        """Overwrite content and record the editor. Previous content is lost."""
        self.content = content
        self.last_edited_by = edited_by
