"""Health service implementation."""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ... import __version__
from ..realtime.registry import RoomRegistry, get_room_registry
from ..schemas.common import HealthCheckResponse
from .interfaces import IHealthService


class HealthService(IHealthService):
    """Health check service implementation."""

    def __init__(self, session: AsyncSession, registry: Optional[RoomRegistry] = None):
        self.session = session
        self.registry = registry or get_room_registry()

    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        db_health = await self.check_database_health()
        realtime_health = await self.check_realtime_health()

        overall_status = "healthy" if db_health["connected"] else "unhealthy"

        return HealthCheckResponse(
            status=overall_status,
            timestamp=datetime.now(timezone.utc),
            version=__version__,
            checks={"database": db_health, "realtime": realtime_health},
        )

    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        loop = asyncio.get_running_loop()
        try:
            start_time = loop.time()
            result = await self.session.execute(text("SELECT 1"))
            result.scalar()
            response_time = (loop.time() - start_time) * 1000

            return {
                "connected": True,
                "status": "healthy",
                "response_time_ms": round(response_time, 2),
            }
        except Exception as e:
            return {
                "connected": False,
                "status": "unhealthy",
                "error": str(e),
                "response_time_ms": 0.0,
            }

    async def check_realtime_health(self) -> Dict[str, Any]:
        """Presence figures from the in-memory registry."""
        rooms = self.registry.snapshot()
        return {
            "status": "healthy",
            "rooms": len(rooms),
            "participants": sum(rooms.values()),
        }
