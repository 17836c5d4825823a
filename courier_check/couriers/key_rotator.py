"""Hoorin API 키 라운드로빈 로테이터"""

from __future__ import annotations

import re
from typing import List

from courier_check.core.exceptions import NoApiKeysException
from courier_check.core.logging import logger
from courier_check.services import StateStore
from courier_check.utils.hash_utils import KEY_INDEX_KEY

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


def parse_key_pool(raw: str) -> List[str]:
    """설정값(여러 줄 문자열)을 키 목록으로 변환

    줄바꿈 종류와 무관하게 분리하고, 앞뒤 공백 제거 후 빈 줄은 버립니다.
    """
    if not raw:
        return []
    return [key.strip() for key in _NEWLINE_RE.split(raw) if key.strip()]


class KeyRotator:
    """저장소에 커서를 영속화하는 라운드로빈 키 선택기

    커서는 키 호출 결과와 무관하게 매번 전진합니다.
    """

    def __init__(self, store: StateStore, index_key: str = KEY_INDEX_KEY):
        self.store = store
        self.index_key = index_key

    def next_key(self, pool: List[str]) -> str:
        """
        이번 요청에 사용할 키 반환

        Args:
            pool: parse_key_pool로 정리된 키 목록

        Returns:
            선택된 API 키

        Raises:
            NoApiKeysException: 키 풀이 비어 있는 경우
        """
        if not pool:
            raise NoApiKeysException()

        index = self.store.rotate_index(self.index_key, len(pool))
        logger.debug(f"[HOORIN] key index={index}/{len(pool)}")
        return pool[index]
