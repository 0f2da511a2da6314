"""Process-wide Socket.IO server.

Mounted around the FastAPI app in ``roomnotes.main`` via ``socketio.ASGIApp``
so HTTP and realtime traffic share one port.
"""

from __future__ import annotations

from typing import Optional

import socketio

from ...config import Settings, get_settings
from .gateway import RealtimeGateway
from .registry import get_room_registry


def create_socket_server(settings: Settings) -> socketio.AsyncServer:
    origins = settings.socketio_cors_origins
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins="*" if "*" in origins else origins,
        logger=False,
        engineio_logger=False,
    )


_gateway: Optional[RealtimeGateway] = None


def get_gateway() -> RealtimeGateway:
    """Get the gateway singleton, wiring handlers on first use."""
    global _gateway
    if _gateway is None:
        _gateway = RealtimeGateway(create_socket_server(get_settings()), get_room_registry())
        _gateway.register()
    return _gateway
