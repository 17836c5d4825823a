"""전역 테스트 설정

역할:
- 테스트 환경 변수 구성 (Settings import 전에 설정)
- 공통 Fake 주입 (인메모리 StateStore, Fake HTTP 클라이언트)
"""

from __future__ import annotations

import os
import sys
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Union

# Settings는 import 시점에 생성되므로 가장 먼저 설정
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest

# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from courier_check.couriers.http_client import HttpResponse  # noqa: E402


class InMemoryStateStore:
    """테스트용 인메모리 StateStore

    - get/set-with-expiry, 원자적 커서 로테이션
    - 호출 횟수 기록
    """

    def __init__(self) -> None:
        self.data: dict[str, tuple[Any, Optional[float]]] = {}
        self.get_calls = 0
        self.set_calls = 0
        self._lock = threading.Lock()

    def get_json(self, key: str) -> Optional[Any]:
        self.get_calls += 1
        with self._lock:
            entry = self.data.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and time.time() >= expires_at:
                del self.data[key]
                return None
            return value

    def set_json(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        self.set_calls += 1
        with self._lock:
            expires_at = None if ttl_seconds is None else time.time() + ttl_seconds
            self.data[key] = (value, expires_at)

    def rotate_index(self, key: str, size: int) -> int:
        with self._lock:
            entry = self.data.get(key)
            cur = int(entry[0]) if entry is not None else 0
            if cur < 0 or cur >= size:
                cur = 0
            self.data[key] = ((cur + 1) % size, None)
            return cur

    def health_check(self) -> bool:
        return True


Responder = Union[HttpResponse, None, Callable[..., Any]]


@dataclass
class RecordedCall:
    method: str
    url: str
    kwargs: dict[str, Any]


@dataclass
class FakeHttpClient:
    """URL 접두사 기준으로 응답을 돌려주는 Fake CourierHttpClient

    routes 값:
    - HttpResponse: 그대로 반환
    - None: 전송 실패
    - callable: (method, url, **kwargs) 호출 결과 (async 가능)
    """

    routes: dict[tuple[str, str], Responder] = field(default_factory=dict)
    calls: list[RecordedCall] = field(default_factory=list)

    def add(self, method: str, url_prefix: str, responder: Responder) -> None:
        self.routes[(method.upper(), url_prefix)] = responder

    def calls_to(self, url_prefix: str) -> list[RecordedCall]:
        return [c for c in self.calls if c.url.startswith(url_prefix)]

    async def request(self, method: str, url: str, *, timeout_s: float, **kwargs: Any) -> Optional[HttpResponse]:
        self.calls.append(RecordedCall(method.upper(), url, dict(kwargs, timeout_s=timeout_s)))
        for (route_method, prefix), responder in self.routes.items():
            if route_method == method.upper() and url.startswith(prefix):
                if callable(responder):
                    result = responder(method, url, **kwargs)
                    if hasattr(result, "__await__"):
                        result = await result
                    return result
                return responder
        return None

    async def get(self, url: str, *, timeout_s: float, **kwargs: Any) -> Optional[HttpResponse]:
        return await self.request("GET", url, timeout_s=timeout_s, **kwargs)

    async def post(self, url: str, *, timeout_s: float, **kwargs: Any) -> Optional[HttpResponse]:
        return await self.request("POST", url, timeout_s=timeout_s, **kwargs)


@pytest.fixture
def state_store() -> InMemoryStateStore:
    return InMemoryStateStore()


@pytest.fixture
def fake_http() -> FakeHttpClient:
    return FakeHttpClient()
