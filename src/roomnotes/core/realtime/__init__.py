"""Room presence and live note relays over Socket.IO."""

from .gateway import RealtimeGateway
from .registry import Departure, Participant, RoomRegistry, get_room_registry
from .server import create_socket_server, get_gateway

__all__ = [
    "RealtimeGateway",
    "RoomRegistry",
    "Participant",
    "Departure",
    "get_room_registry",
    "create_socket_server",
    "get_gateway",
]
