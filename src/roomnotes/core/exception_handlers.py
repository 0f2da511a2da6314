"""
Exception handlers.

Convert domain exceptions and request validation failures into the
``{"message": ...}`` JSON bodies every API error uses.

Usage:
    app = FastAPI()
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .exceptions import NotFoundError, RoomNotesError, StoreError, ValidationError
from .logging import get_logger

logger = get_logger("errors")

# Map exception types to HTTP status codes
EXCEPTION_STATUS_MAP: dict[type[RoomNotesError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    StoreError: 500,
}


def _status_for(exc: RoomNotesError) -> int:
    for exc_type in type(exc).__mro__:
        if exc_type in EXCEPTION_STATUS_MAP:
            return EXCEPTION_STATUS_MAP[exc_type]
    return 500


async def roomnotes_error_handler(request: Request, exc: RoomNotesError) -> JSONResponse:
    """Handle every RoomNotesError subclass."""
    status_code = _status_for(exc)

    log_extra = {
        "error_type": type(exc).__name__,
        "status": status_code,
        "path": request.url.path,
        "method": request.method,
    }
    if status_code >= 500:
        logger.error(f"Server error: {exc.message}", extra=log_extra)
    else:
        logger.warning(f"Client error: {exc.message}", extra=log_extra)

    return JSONResponse(status_code=status_code, content={"message": exc.message})


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        # drop the leading "body"/"path" marker from the location
        loc = [str(p) for p in err.get("loc", []) if p not in ("body", "path", "query")]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Request validation failed"


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 400 with a readable message."""
    message = _describe_validation_errors(exc)
    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(exc.errors()),
        },
    )
    return JSONResponse(status_code=400, content={"message": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all handlers to the app."""
    app.add_exception_handler(RoomNotesError, roomnotes_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
