"""API package - FastAPI routes and dependencies."""
from .dependencies import get_ranking_service
from .routers import health_router, rankings_router

__all__ = ["get_ranking_service", "health_router", "rankings_router"]
