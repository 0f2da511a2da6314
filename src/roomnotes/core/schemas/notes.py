"""
Note schemas.

API contracts for the room-scoped note CRUD endpoints. Field names are
snake_case in Python and camelCase on the wire.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for schemas exchanged with the browser client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NoteCreate(CamelModel):
    """Note creation request schema."""

    title: str = Field(min_length=1, max_length=200, description="Note title")
    # must be present, may be empty
    content: str = Field(description="Note content")
    room_id: str = Field(min_length=1, max_length=255, description="Room the note belongs to")
    created_by: str = Field(min_length=1, max_length=100, description="Author display name")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Sprint retro",
                "content": "What went well:\n- shipped the editor",
                "roomId": "team-alpha",
                "createdBy": "alice",
            }
        }
    )


class NoteUpdate(CamelModel):
    """Note update request schema. Only content and editor can change."""

    content: str = Field(description="Replacement content (may be empty)")
    last_edited_by: str = Field(min_length=1, max_length=100, description="Editor display name")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"content": "What went well:\n- everything", "lastEditedBy": "bob"}
        }
    )


class NoteResponse(CamelModel):
    """Note response schema."""

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str
    content: str
    room_id: str
    created_by: str
    last_edited_by: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Sprint retro",
                "content": "What went well:\n- shipped the editor",
                "roomId": "team-alpha",
                "createdBy": "alice",
                "lastEditedBy": "bob",
                "createdAt": "2025-09-13T10:30:00Z",
                "updatedAt": "2025-09-13T11:00:00Z",
            }
        },
    )
