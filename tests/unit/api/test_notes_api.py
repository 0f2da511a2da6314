"""Unit tests for notes API router (src/roomnotes/api/notes.py)."""

import uuid
from typing import Any

import pytest
from fastapi.testclient import TestClient

from roomnotes.core.exceptions import NotFoundError, StoreError
from roomnotes.core.services.note_service import NoteService
from roomnotes.database import get_db_session
from roomnotes.main import app


@pytest.fixture
def client():
    async def _no_db():
        yield None

    app.dependency_overrides[get_db_session] = _no_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _note(**overrides) -> dict[str, Any]:
    note = {
        "id": str(uuid.uuid4()),
        "title": "t",
        "content": "c",
        "room_id": "R",
        "created_by": "alice",
        "last_edited_by": "alice",
        "created_at": "2025-01-01T00:00:00Z",
        "updated_at": "2025-01-01T00:00:00Z",
    }
    note.update(overrides)
    return note


def test_list_room_notes_calls_service(monkeypatch, client):
    called = {}

    async def fake_list(self, room_id):
        called["room_id"] = room_id
        return [_note(), _note(title="second")]

    monkeypatch.setattr(NoteService, "list_room_notes", fake_list, raising=True)

    resp = client.get("/api/notes/room/team-alpha")

    assert resp.status_code == 200
    assert called["room_id"] == "team-alpha"
    data = resp.json()
    assert [n["title"] for n in data] == ["t", "second"]
    assert data[0]["roomId"] == "R"
    assert data[0]["lastEditedBy"] == "alice"


def test_create_note_returns_201(monkeypatch, client, note_payload):
    async def fake_create(self, request):
        return _note(
            title=request.title,
            content=request.content,
            room_id=request.room_id,
            created_by=request.created_by,
            last_edited_by=request.created_by,
        )

    monkeypatch.setattr(NoteService, "create_note", fake_create, raising=True)

    resp = client.post("/api/notes", json=note_payload)

    assert resp.status_code == 201
    data = resp.json()
    assert data["title"] == "Sprint retro"
    assert data["roomId"] == "team-alpha"
    assert data["createdBy"] == data["lastEditedBy"] == "alice"


@pytest.mark.parametrize("missing", ["title", "roomId", "content"])
def test_create_note_missing_field_is_400(client, note_payload, missing):
    del note_payload[missing]

    resp = client.post("/api/notes", json=note_payload)

    assert resp.status_code == 400
    assert missing in resp.json()["message"]


def test_update_note_calls_service(monkeypatch, client):
    called = {}

    async def fake_update(self, note_id, request):
        called["note_id"] = note_id
        return _note(id=note_id, content=request.content, last_edited_by=request.last_edited_by)

    monkeypatch.setattr(NoteService, "update_note", fake_update, raising=True)

    note_id = str(uuid.uuid4())
    resp = client.put(f"/api/notes/{note_id}", json={"content": "", "lastEditedBy": "bob"})

    assert resp.status_code == 200
    assert called["note_id"] == note_id
    assert resp.json()["content"] == ""
    assert resp.json()["lastEditedBy"] == "bob"


def test_update_unknown_note_is_404(monkeypatch, client):
    async def fake_update(self, note_id, request):
        raise NotFoundError()

    monkeypatch.setattr(NoteService, "update_note", fake_update, raising=True)

    resp = client.put(f"/api/notes/{uuid.uuid4()}", json={"content": "x", "lastEditedBy": "bob"})

    assert resp.status_code == 404
    assert resp.json() == {"message": "Note not found"}


def test_delete_note(monkeypatch, client):
    async def fake_delete(self, note_id):
        return None

    monkeypatch.setattr(NoteService, "delete_note", fake_delete, raising=True)

    resp = client.delete(f"/api/notes/{uuid.uuid4()}")

    assert resp.status_code == 200
    assert resp.json() == {"message": "Note removed"}


def test_store_failure_is_500(monkeypatch, client):
    async def fake_list(self, room_id):
        raise StoreError("Note store unavailable during list")

    monkeypatch.setattr(NoteService, "list_room_notes", fake_list, raising=True)

    resp = client.get("/api/notes/room/R")

    assert resp.status_code == 500
    assert resp.json() == {"message": "Note store unavailable during list"}
