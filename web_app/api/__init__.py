"""API routers."""

from .routes import router as api_router
from .health import router as health_router

__all__ = ["api_router", "health_router"]
