from __future__ import annotations

from clock_api.api.routes.health import router as health_router
from clock_api.api.routes.timezone import router as timezone_router

__all__ = ["health_router", "timezone_router"]
