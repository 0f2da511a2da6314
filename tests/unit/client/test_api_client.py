"""NotesApiClient against an httpx mock transport."""

import json

import httpx
import pytest

from roomnotes.client.api import ApiError, NotesApiClient


def make_client(handler):
    return NotesApiClient("http://notes.test/", transport=httpx.MockTransport(handler))


async def test_list_room_notes():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        return httpx.Response(200, json=[{"id": "n1"}])

    async with make_client(handler) as api:
        assert await api.list_room_notes("team-alpha") == [{"id": "n1"}]
    assert seen["url"] == "http://notes.test/api/notes/room/team-alpha"


async def test_create_sends_wire_body():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"id": "n1", **seen["body"]})

    async with make_client(handler) as api:
        note = await api.create_note("t", "", "R", "alice")

    assert seen["method"] == "POST"
    assert seen["body"] == {"title": "t", "content": "", "roomId": "R", "createdBy": "alice"}
    assert note["id"] == "n1"


async def test_update_sends_editor():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "n1"})

    async with make_client(handler) as api:
        await api.update_note("n1", "new", "bob")

    assert seen == {"path": "/api/notes/n1", "body": {"content": "new", "lastEditedBy": "bob"}}


async def test_error_carries_server_message():
    def handler(request):
        return httpx.Response(404, json={"message": "Note not found"})

    async with make_client(handler) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.delete_note("n1")

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Note not found"
    assert exc_info.value.is_not_found


async def test_error_without_json_body():
    def handler(request):
        return httpx.Response(502, text="bad gateway")

    async with make_client(handler) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.list_room_notes("R")

    assert exc_info.value.message == "bad gateway"
    assert not exc_info.value.is_not_found
