"""Engine Layer - 요청 처리 파이프라인

- CourierCheckDispatcher: 요청 진입점 (검증 → 캐시 → 경로 선택 → 저장)
- ResultCache: 검색어 단위 결과 캐시
- normalize_responses: 세 택배사 응답 통합
"""

from .dispatcher import CourierCheckDispatcher
from .normalizer import normalize_responses
from .result_cache import ResultCache

__all__ = [
    "CourierCheckDispatcher",
    "ResultCache",
    "normalize_responses",
]
