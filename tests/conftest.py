"""Shared pytest fixtures configured to use SQLite in-memory for tests."""

import logging
import os
from collections import defaultdict

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Tell app lifespan to skip real DB init before the app module is imported
os.environ["ROOMNOTES_SKIP_LIFESPAN_DB"] = "1"

from roomnotes.config import Settings, get_settings  # noqa: E402
from roomnotes.core.models import BaseModel  # noqa: E402
from roomnotes.core.realtime.gateway import RealtimeGateway  # noqa: E402
from roomnotes.core.realtime.registry import RoomRegistry  # noqa: E402
from roomnotes.database import get_db_session  # noqa: E402
from roomnotes.main import app  # noqa: E402

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@pytest.fixture(scope="session")
def test_settings():
    """Override settings for testing using SQLite in-memory DB."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        debug=True,
    )


@pytest.fixture
async def test_engine(test_settings):
    """Fresh SQLite in-memory engine with the schema created."""
    engine = create_async_engine(
        test_settings.database_url,
        echo=False,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    """Database session per test."""
    session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def override_get_db(test_session):
    """Override the get_db dependency."""

    async def _override_get_db():
        yield test_session

    return _override_get_db


@pytest.fixture
def test_app(override_get_db, test_settings):
    """FastAPI app with the test database wired in."""
    app.dependency_overrides[get_db_session] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    """Async client bound to the app; shares the event loop with the DB session."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def note_payload():
    """Sample note creation body, wire format."""
    return {
        "title": "Sprint retro",
        "content": "What went well",
        "roomId": "team-alpha",
        "createdBy": "alice",
    }


class FakeSocketServer:
    """Stands in for socketio.AsyncServer.

    Keeps room membership like the real server manager does and records
    every delivered event per sid.
    """

    def __init__(self):
        self.handlers = {}
        self.rooms = defaultdict(set)
        self.inbox = defaultdict(list)

    def on(self, event, handler):
        self.handlers[event] = handler

    async def enter_room(self, sid, room, namespace=None):
        self.rooms[room].add(sid)

    async def leave_room(self, sid, room, namespace=None):
        self.rooms[room].discard(sid)

    async def emit(self, event, data=None, to=None, room=None, skip_sid=None, namespace=None):
        if to is not None:
            recipients = {to}
        else:
            recipients = set(self.rooms.get(room, set()))
        for sid in recipients:
            if sid != skip_sid:
                self.inbox[sid].append((event, data))

    # helpers driving the handlers the way the transport would

    async def connect(self, sid):
        await self.handlers["connect"](sid, {})

    async def send(self, sid, event, data):
        await self.handlers[event](sid, data)

    async def drop(self, sid):
        await self.handlers["disconnect"](sid, "transport close")
        for members in self.rooms.values():
            members.discard(sid)

    def received(self, sid, event=None):
        return [data for name, data in self.inbox[sid] if event is None or name == event]

    def reset_inboxes(self):
        self.inbox.clear()


@pytest.fixture
def room_registry():
    return RoomRegistry()


@pytest.fixture
def fake_sio():
    return FakeSocketServer()


@pytest.fixture
def gateway(fake_sio, room_registry):
    gw = RealtimeGateway(fake_sio, room_registry)
    gw.register()
    return gw
