"""상태 저장 서비스 - export only."""

from .impl import RedisStateStore, StateStore

__all__ = ["RedisStateStore", "StateStore"]
