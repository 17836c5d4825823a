"""택배사 HTTP 클라이언트 (curl_cffi)

- 봇 로그인 쿠키가 다른 택배사/다른 요청으로 새지 않도록
  호출마다 별도의 AsyncSession(쿠키 저장소)을 사용합니다.
- 전송 계층 실패(타임아웃 포함)는 예외 대신 None으로 돌려줍니다.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from curl_cffi.requests import AsyncSession

from courier_check.core.config import settings
from courier_check.core.logging import logger


@dataclass
class HttpResponse:
    """전송에 성공한 응답 (상태 코드와 무관)"""

    status_code: int
    text: str
    set_cookie: List[str] = field(default_factory=list)
    cookies: Dict[str, str] = field(default_factory=dict)


def _set_cookie_values(headers: Any) -> List[str]:
    """Set-Cookie 헤더 값을 모두 반환 (반복 헤더 대응)"""
    if headers is None:
        return []
    get_list = getattr(headers, "get_list", None)
    if callable(get_list):
        return [v for v in get_list("set-cookie") if v]
    value = headers.get("set-cookie")
    if not value:
        return []
    return list(value) if isinstance(value, (list, tuple)) else [value]


class CourierHttpClient:
    def __init__(
        self,
        impersonate: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        self.impersonate = impersonate or settings.courier_http_impersonate
        self.user_agent = user_agent or settings.courier_user_agent

    def default_headers(self) -> Dict[str, str]:
        return {"User-Agent": self.user_agent}

    async def request(
        self,
        method: str,
        url: str,
        *,
        timeout_s: float,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, str]] = None,
        data: Optional[Mapping[str, str]] = None,
        json_body: Optional[Any] = None,
        cookies: Optional[Mapping[str, str]] = None,
        follow_redirects: bool = True,
    ) -> Optional[HttpResponse]:
        merged = self.default_headers()
        if headers:
            merged.update(headers)

        try:
            async with AsyncSession(impersonate=self.impersonate, trust_env=False) as sess:
                resp = await asyncio.wait_for(
                    sess.request(
                        method,
                        url,
                        params=dict(params) if params else None,
                        data=dict(data) if data else None,
                        json=json_body,
                        headers=merged,
                        cookies=dict(cookies) if cookies else None,
                        timeout=timeout_s,
                        allow_redirects=follow_redirects,
                    ),
                    timeout=timeout_s,
                )
                return HttpResponse(
                    status_code=getattr(resp, "status_code", 0) or 0,
                    text=getattr(resp, "text", "") or "",
                    set_cookie=_set_cookie_values(getattr(resp, "headers", None)),
                    cookies=dict(resp.cookies) if getattr(resp, "cookies", None) else {},
                )
        except Exception as e:
            logger.info(f"[HTTP_CLIENT] {method} failed: {type(e).__name__}: {repr(e)}")
            return None

    async def get(self, url: str, *, timeout_s: float, **kwargs: Any) -> Optional[HttpResponse]:
        return await self.request("GET", url, timeout_s=timeout_s, **kwargs)

    async def post(self, url: str, *, timeout_s: float, **kwargs: Any) -> Optional[HttpResponse]:
        return await self.request("POST", url, timeout_s=timeout_s, **kwargs)


_shared_http_client = CourierHttpClient()


def get_http_client() -> CourierHttpClient:
    return _shared_http_client
