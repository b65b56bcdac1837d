"""API routers."""
from .health import router as health_router
from .rankings import router as rankings_router

__all__ = ["health_router", "rankings_router"]
