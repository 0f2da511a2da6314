"""
Domain exceptions.

Raised by the service and repository layers; translated into
``{"message": ...}`` JSON bodies by ``core.exception_handlers``.
"""


class RoomNotesError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(RoomNotesError):
    """A field passed schema checks but breaks a domain rule, e.g. a blank room id."""

    def __init__(self, message: str = "Validation failed") -> None:
        super().__init__(message)


class NotFoundError(RoomNotesError):
    """Unknown note id."""

    def __init__(self, message: str = "Note not found") -> None:
        super().__init__(message)


class StoreError(RoomNotesError):
    """The backing store failed or is unavailable."""

    def __init__(self, message: str = "Store unavailable") -> None:
        super().__init__(message)
