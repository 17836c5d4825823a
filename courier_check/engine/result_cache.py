"""Result Cache - 검색어 단위 최종 결과 캐시

StateStore를 Dispatcher가 기대하는 get/set 인터페이스로 감쌉니다.
읽기 실패는 미스로, 쓰기 실패는 경고 로그만 남기고 넘어갑니다.
"""

from typing import Any, Optional

from courier_check.core.exceptions import StateStoreException
from courier_check.core.logging import logger, mask_phone
from courier_check.services import StateStore
from courier_check.utils.hash_utils import generate_result_cache_key


class ResultCache:
    """검색어 → 결과 JSON 캐시 (TTL)"""

    def __init__(self, store: StateStore):
        self.store = store

    def get(self, search_term: str) -> Optional[Any]:
        """캐시 조회

        Args:
            search_term: 검색어

        Returns:
            캐시된 결과 또는 None
        """
        cache_key = generate_result_cache_key(search_term)
        try:
            cached = self.store.get_json(cache_key)
        except StateStoreException as e:
            logger.warning(f"[CACHE] read failed, treating as miss: {e}")
            return None

        if cached is None:
            logger.info(f"[CACHE] miss for {mask_phone(search_term)}")
            return None

        logger.info(f"[CACHE] hit for {mask_phone(search_term)}")
        return cached

    def set(self, search_term: str, data: Any, ttl_seconds: int) -> bool:
        """캐시 저장

        Args:
            search_term: 검색어
            data: 저장할 결과
            ttl_seconds: TTL (초, > 0)

        Returns:
            성공 여부
        """
        if ttl_seconds <= 0:
            return False

        cache_key = generate_result_cache_key(search_term)
        try:
            self.store.set_json(cache_key, data, ttl_seconds)
        except StateStoreException as e:
            logger.warning(f"[CACHE] write failed: {e}")
            return False

        logger.info(f"[CACHE] set for {mask_phone(search_term)}, TTL: {ttl_seconds}s")
        return True
