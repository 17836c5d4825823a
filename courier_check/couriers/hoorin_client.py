"""Hoorin 어그리게이터 호출 (키 풀 경로)

응답은 이미 Summaries 포맷이므로 Normalizer를 거치지 않고 그대로 반환합니다.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from courier_check.core.config import settings
from courier_check.core.exceptions import (
    ExternalApiException,
    InvalidJsonException,
    UpstreamTransportException,
)
from courier_check.core.logging import logger, mask_phone
from courier_check.couriers.http_client import CourierHttpClient, get_http_client
from courier_check.couriers.key_rotator import KeyRotator, parse_key_pool


def _decode_json(body: str) -> Optional[Any]:
    try:
        return json.loads(body)
    except (json.JSONDecodeError, TypeError, ValueError):
        return None


class HoorinClient:
    """라운드로빈 키로 Hoorin API 단건 조회"""

    def __init__(
        self,
        rotator: KeyRotator,
        http_client: Optional[CourierHttpClient] = None,
        api_keys: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
    ):
        self.rotator = rotator
        self.http = http_client or get_http_client()
        self.api_keys = settings.hoorin_api_keys if api_keys is None else api_keys
        self.api_url = api_url or settings.hoorin_api_url
        self.timeout_s = timeout_s or settings.courier_http_timeout_s

    async def fetch(self, search_term: str) -> Any:
        """
        Hoorin 조회

        Args:
            search_term: 전화번호

        Returns:
            파싱된 JSON (가공 없음)

        Raises:
            NoApiKeysException: 키 미설정
            UpstreamTransportException: 전송 실패
            ExternalApiException: 200이 아닌 응답
            InvalidJsonException: 200이지만 JSON이 아님
        """
        key = self.rotator.next_key(parse_key_pool(self.api_keys))

        logger.info(f"[HOORIN] Fetching summary for {mask_phone(search_term)}")
        response = await self.http.get(
            self.api_url,
            timeout_s=self.timeout_s,
            params={"apiKey": key, "searchTerm": search_term},
        )

        if response is None:
            raise UpstreamTransportException("Network error or timeout.")

        if response.status_code != 200:
            logger.warning(f"[HOORIN] Upstream error status={response.status_code}")
            raise ExternalApiException(response.status_code, _decode_json(response.text))

        data = _decode_json(response.text)
        if data is None:
            logger.warning(f"[HOORIN] Invalid JSON (len={len(response.text)})")
            raise InvalidJsonException(response.text)

        return data
