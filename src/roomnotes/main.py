# Main application entry point
import os
from contextlib import asynccontextmanager

import socketio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import health_router, notes_router
from .config import get_settings
from .core.exception_handlers import register_exception_handlers
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.realtime import get_gateway
from .database import create_tables

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Starting RoomNotes application",
        extra={"version": __version__, "environment": settings.environment, "debug": settings.debug},
    )

    # Allow tests to skip touching the real DB (e.g., when using SQLite in-memory)
    if os.getenv("ROOMNOTES_SKIP_LIFESPAN_DB") == "1":
        logger.info("Skipping DB table creation due to ROOMNOTES_SKIP_LIFESPAN_DB=1")
    else:
        try:
            await create_tables()
            logger.info("Database tables created/verified")
        except Exception as e:
            logger.error("Failed to create database tables", exc_info=e)
            raise

    yield

    # presence is process-local, nothing to flush
    logger.info("Shutting down RoomNotes application")


app = FastAPI(
    title="RoomNotes",
    description="Room-scoped collaborative notes API",
    version=__version__,
    lifespan=lifespan,
)

register_exception_handlers(app)

# Add logging middleware
app.add_middleware(LoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(notes_router, prefix="/api")
app.include_router(health_router, prefix="/api")


# Root endpoint
@app.get("/")
async def root():
    return {"message": "RoomNotes API"}


# Basic unprefixed health endpoint for load balancers
@app.get("/health")
async def basic_health():
    return {"status": "ok"}


# Socket.IO wraps the HTTP app; serve this one.
asgi_app = socketio.ASGIApp(
    get_gateway().sio,
    other_asgi_app=app,
    socketio_path=settings.socketio_path,
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("roomnotes.main:asgi_app", host=settings.host, port=settings.port, reload=settings.reload)
