"""API 엔드포인트 패키지 - export only."""

from .error_handlers import register_exception_handlers
from .routes import courier_router, health_router, get_dispatcher, get_state_store

__all__ = ["courier_router", "health_router", "get_dispatcher", "get_state_store", "register_exception_handlers"]
