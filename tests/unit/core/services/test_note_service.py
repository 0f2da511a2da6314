import uuid
from datetime import datetime, timezone

import pytest

from roomnotes.core.exceptions import NotFoundError, ValidationError
from roomnotes.core.schemas.notes import NoteCreate, NoteUpdate
from roomnotes.core.services.note_service import NoteService


class Dummy:
    def __init__(self, **kw):
        self.__dict__.update(kw)


def make_note(**overrides):
    now = datetime.now(timezone.utc)
    data = dict(
        id=uuid.uuid4(),
        title="T",
        content="c",
        room_id="R",
        created_by="alice",
        last_edited_by="alice",
        created_at=now,
        updated_at=now,
    )
    data.update(overrides)
    return Dummy(**data)


class FakeNoteRepo:
    def __init__(self, notes=None):
        self.notes = {n.id: n for n in (notes or [])}
        self.created = None

    async def create_note(self, data):
        self.created = data
        note = make_note(**data)
        self.notes[note.id] = note
        return note

    async def list_by_room(self, room_id):
        return [n for n in self.notes.values() if n.room_id == room_id]

    async def update_note(self, note_id, content, edited_by):
        note = self.notes.get(note_id)
        if not note:
            return None
        note.content = content
        note.last_edited_by = edited_by
        return note

    async def delete_note(self, note_id):
        return self.notes.pop(note_id, None) is not None


@pytest.fixture
def repo(monkeypatch):
    import roomnotes.core.services.note_service as ns

    fake = FakeNoteRepo()
    monkeypatch.setattr(ns, "NoteRepository", lambda s: fake, raising=True)
    return fake


@pytest.fixture
def service(repo):
    return NoteService(session=object())


async def test_create_sets_editor_to_author(service, repo):
    created = await service.create_note(
        NoteCreate(title="Agenda", content="", room_id="R", created_by="alice")
    )

    assert repo.created["last_edited_by"] == "alice"
    assert created.created_by == "alice"
    assert created.last_edited_by == "alice"
    assert created.content == ""


async def test_list_filters_by_room(service, repo):
    await service.create_note(NoteCreate(title="a", content="1", room_id="R", created_by="x"))
    await service.create_note(NoteCreate(title="b", content="2", room_id="S", created_by="x"))

    notes = await service.list_room_notes("R")
    assert [n.title for n in notes] == ["a"]
    assert await service.list_room_notes("empty") == []


async def test_update_replaces_content_and_editor(service, repo):
    created = await service.create_note(
        NoteCreate(title="a", content="old", room_id="R", created_by="alice")
    )

    updated = await service.update_note(
        str(created.id), NoteUpdate(content="new", last_edited_by="bob")
    )

    assert updated.content == "new"
    assert updated.last_edited_by == "bob"
    assert updated.created_by == "alice"


async def test_update_unknown_id_is_not_found(service):
    with pytest.raises(NotFoundError):
        await service.update_note(str(uuid.uuid4()), NoteUpdate(content="x", last_edited_by="bob"))


async def test_malformed_id_is_not_found(service):
    with pytest.raises(NotFoundError):
        await service.update_note("not-a-uuid", NoteUpdate(content="x", last_edited_by="bob"))
    with pytest.raises(NotFoundError):
        await service.delete_note("507f1f77bcf86cd799439011")


async def test_delete_then_delete_again(service):
    created = await service.create_note(
        NoteCreate(title="a", content="", room_id="R", created_by="alice")
    )

    await service.delete_note(str(created.id))
    with pytest.raises(NotFoundError):
        await service.delete_note(str(created.id))


async def test_delete_then_update_is_not_found(service):
    created = await service.create_note(
        NoteCreate(title="a", content="", room_id="R", created_by="alice")
    )
    await service.delete_note(str(created.id))

    with pytest.raises(NotFoundError):
        await service.update_note(str(created.id), NoteUpdate(content="x", last_edited_by="bob"))


async def test_create_with_blank_author_is_rejected(service, repo):
    with pytest.raises(ValidationError, match="createdBy cannot be blank"):
        await service.create_note(NoteCreate(title="Agenda", content="", room_id="R", created_by="  "))
    assert repo.created is None


async def test_create_with_blank_room_is_rejected(service, repo):
    with pytest.raises(ValidationError, match="roomId"):
        await service.create_note(NoteCreate(title="Agenda", content="", room_id=" ", created_by="a"))


async def test_update_with_blank_editor_is_rejected(service, repo):
    note = make_note()
    repo.notes[note.id] = note

    with pytest.raises(ValidationError, match="lastEditedBy cannot be blank"):
        await service.update_note(str(note.id), NoteUpdate(content="x", last_edited_by="\t"))
    assert note.content == "c"
