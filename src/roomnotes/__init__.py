"""
RoomNotes Backend - Room-scoped Collaborative Notes

Shared notes grouped by room, with live presence and change relay
over Socket.IO.
"""

__version__ = "0.1.0"
