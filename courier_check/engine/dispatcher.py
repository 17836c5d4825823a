"""Courier Check Dispatcher - 요청 진입점

1. searchTerm 검증
2. 결과 캐시 확인
3. 데이터 소스 선택 (Hoorin 키 풀 | 택배사 직접 조회)
4. 결과 캐시 저장 후 반환
"""

from typing import Any, Optional

from courier_check.core.config import settings
from courier_check.core.exceptions import InvalidSearchTermException
from courier_check.core.logging import logger, mask_phone
from courier_check.couriers import DirectCourierFetcher, HoorinClient
from courier_check.utils.text_utils import sanitize_text_field

from .normalizer import normalize_responses
from .result_cache import ResultCache


class CourierCheckDispatcher:
    """요청 단위 오케스트레이터

    실패(예외)는 그대로 호출자에게 전달하고 캐시하지 않습니다.
    """

    def __init__(
        self,
        result_cache: ResultCache,
        hoorin_client: HoorinClient,
        direct_fetcher: DirectCourierFetcher,
        data_source: Optional[str] = None,
        cache_duration_hours: Optional[int] = None,
    ):
        """
        Args:
            result_cache: 결과 캐시
            hoorin_client: 키 풀 경로 클라이언트
            direct_fetcher: 직접 조회 경로
            data_source: "pool" | "direct" (기본값: 설정)
            cache_duration_hours: 캐시 시간 (0이면 비활성화, 기본값: 설정)
        """
        if result_cache is None:
            raise ValueError("result_cache must not be None")
        if hoorin_client is None:
            raise ValueError("hoorin_client must not be None")
        if direct_fetcher is None:
            raise ValueError("direct_fetcher must not be None")

        self.cache = result_cache
        self.hoorin = hoorin_client
        self.direct = direct_fetcher
        self.data_source = data_source or settings.data_source
        self.cache_duration_hours = (
            settings.cache_duration if cache_duration_hours is None else cache_duration_hours
        )

    @property
    def cache_ttl_seconds(self) -> int:
        return max(0, self.cache_duration_hours) * 3600

    async def handle(self, search_term: Optional[str]) -> Any:
        """배송 이력 조회

        Args:
            search_term: 전화번호

        Returns:
            Summaries 포맷 결과 (pool 경로는 Hoorin 응답 그대로)

        Raises:
            InvalidSearchTermException: searchTerm 누락/공백
            CourierCheckException: pool 경로의 모든 실패
        """
        term = sanitize_text_field(search_term or "")
        if not term:
            raise InvalidSearchTermException()

        ttl = self.cache_ttl_seconds
        if ttl > 0:
            cached = self.cache.get(term)
            if cached is not None:
                return cached

        if self.data_source == "pool":
            logger.info(f"[DISPATCH] pool path for {mask_phone(term)}")
            data = await self.hoorin.fetch(term)
        else:
            logger.info(f"[DISPATCH] direct path for {mask_phone(term)}")
            bodies = await self.direct.fetch_all(term)
            data = normalize_responses(bodies.steadfast, bodies.pathao, bodies.redx)

        if ttl > 0:
            self.cache.set(term, data, ttl)

        return data
