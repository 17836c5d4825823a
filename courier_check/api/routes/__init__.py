"""API routes package."""

from .courier_routes import router as courier_router, get_dispatcher, get_state_store
from .health_routes import router as health_router

__all__ = ["courier_router", "health_router", "get_dispatcher", "get_state_store"]
