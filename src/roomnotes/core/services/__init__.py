"""
Service layer interfaces and implementations.
"""

from .interfaces import IHealthService, INoteService
from .note_service import NoteService
from .health_service import HealthService

__all__ = [
    # Interfaces
    "INoteService",
    "IHealthService",

    # Implementations
    "NoteService",
    "HealthService",
]
