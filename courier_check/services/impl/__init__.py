"""Services implementation package."""

from .state_store import RedisStateStore, StateStore

__all__ = ["RedisStateStore", "StateStore"]
