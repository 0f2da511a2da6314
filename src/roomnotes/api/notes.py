"""Notes API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import ErrorResponse, MessageResponse
from ..core.schemas.notes import NoteCreate, NoteResponse, NoteUpdate
from ..core.services import NoteService
from ..database import get_db_session

router = APIRouter(
    prefix="/notes",
    tags=["notes"],
    responses={500: {"model": ErrorResponse, "description": "Note store unavailable"}},
)


def get_note_service(session: AsyncSession = Depends(get_db_session)) -> NoteService:
    return NoteService(session)


@router.get("/room/{room_id}", response_model=List[NoteResponse])
async def list_room_notes(room_id: str, note_service: NoteService = Depends(get_note_service)):
    """List all notes of a room, oldest first."""
    return await note_service.list_room_notes(room_id)


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_note(request: NoteCreate, note_service: NoteService = Depends(get_note_service)):
    """Create a note in a room."""
    return await note_service.create_note(request)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_note(
    note_id: str,
    request: NoteUpdate,
    note_service: NoteService = Depends(get_note_service),
):
    """Replace a note's content."""
    return await note_service.update_note(note_id, request)


@router.delete(
    "/{note_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_note(note_id: str, note_service: NoteService = Depends(get_note_service)):
    """Delete a note."""
    await note_service.delete_note(note_id)
    return MessageResponse(message="Note removed")
