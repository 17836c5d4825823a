"""Redis 상태 저장소 - 결과 캐시/세션 캐시/키 커서의 원자적 get/set 담당"""
import json
from typing import Any, Optional, Protocol
from redis import Redis

from courier_check.core.config import settings
from courier_check.core.logging import logger
from courier_check.core.exceptions import StateStoreException


class StateStore(Protocol):
    """프로세스 전역 상태 저장소 인터페이스

    컴포넌트는 이 인터페이스만 주입받습니다. (테스트에서는 인메모리 구현 사용)
    """

    def get_json(self, key: str) -> Optional[Any]: ...

    def set_json(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None: ...

    def rotate_index(self, key: str, size: int) -> int: ...


# 커서 읽기 → 범위 밖이면 0 → 다음 값 저장 을 한 번에 수행
_ROTATE_SCRIPT = """
local cur = tonumber(redis.call('GET', KEYS[1]) or '0')
local size = tonumber(ARGV[1])
if cur == nil or cur < 0 or cur >= size then
    cur = 0
end
redis.call('SET', KEYS[1], (cur + 1) % size)
return cur
"""


class RedisStateStore:
    """Redis 기반 StateStore 구현"""

    def __init__(self, redis_client: Optional[Redis] = None):
        """Redis 클라이언트 초기화"""
        try:
            self.redis_client = redis_client or Redis.from_url(
                settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )
            self.redis_client.ping()
            self._rotate = self.redis_client.register_script(_ROTATE_SCRIPT)
            logger.info("Redis connection established")
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            raise StateStoreException("connect", str(e))

    def get_json(self, key: str) -> Optional[Any]:
        """
        JSON 값 조회

        Args:
            key: Redis 키

        Returns:
            역직렬화된 값 또는 None (미스/만료)
        """
        try:
            raw = self.redis_client.get(key)
        except Exception as e:
            logger.error(f"State read error: {e}")
            raise StateStoreException("read", str(e), {"key": key})

        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(f"Failed to deserialize state for key {key}: {e}")
            raise StateStoreException("deserialize", str(e), {"key": key})

    def set_json(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        """
        JSON 값 저장

        Args:
            key: Redis 키
            value: 저장할 값
            ttl_seconds: 만료 시간(초). None이면 만료 없음
        """
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize state: {e}")
            raise StateStoreException("serialize", str(e), {"key": key})

        try:
            if ttl_seconds is None:
                self.redis_client.set(key, payload)
            else:
                self.redis_client.setex(key, ttl_seconds, payload)
        except Exception as e:
            logger.error(f"State write error: {e}")
            raise StateStoreException("write", str(e), {"key": key})

    def rotate_index(self, key: str, size: int) -> int:
        """
        라운드로빈 커서를 원자적으로 읽고 전진

        Args:
            key: 커서 키
            size: 키 풀 크기 (> 0)

        Returns:
            이번 요청에서 사용할 인덱스 (0 <= index < size)
        """
        if size <= 0:
            raise ValueError("size must be positive")
        try:
            return int(self._rotate(keys=[key], args=[size]))
        except Exception as e:
            logger.error(f"Cursor rotate error: {e}")
            raise StateStoreException("rotate", str(e), {"key": key})

    def health_check(self) -> bool:
        """Redis 연결 상태 확인"""
        try:
            self.redis_client.ping()
            return True
        except Exception:
            return False
