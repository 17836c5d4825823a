"""택배사 직접 조회 - 3개 택배사 동시 호출

- 택배사별 자격 증명은 서로 독립적으로 확보 (하나가 실패해도 나머지는 진행)
- 세 요청을 asyncio.gather로 동시에 보내고 전부 끝날 때까지 기다림
- 전송 실패/타임아웃은 해당 택배사만 None, 상태 코드는 그대로 통과
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import quote

from courier_check.core.config import settings
from courier_check.core.exceptions import CourierCheckException
from courier_check.core.logging import logger, mask_phone
from courier_check.couriers.http_client import CourierHttpClient, get_http_client
from courier_check.couriers.sessions import SessionStore


@dataclass
class CourierRequest:
    """택배사 하나에 보낼 요청 명세"""

    courier: str
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Optional[Dict[str, str]] = None
    json_body: Optional[Any] = None


@dataclass
class RawCourierBodies:
    """택배사별 원본 응답 본문 (None = 응답 없음)"""

    steadfast: Optional[str] = None
    pathao: Optional[str] = None
    redx: Optional[str] = None


def pathao_authorization(token: str) -> str:
    """설정된 Pathao 토큰에 Bearer 접두사 보장"""
    if token and not token.startswith("Bearer "):
        return f"Bearer {token}"
    return token


class DirectCourierFetcher:
    """Steadfast / RedX / Pathao 동시 조회기"""

    def __init__(
        self,
        sessions: SessionStore,
        http_client: Optional[CourierHttpClient] = None,
        timeout_s: Optional[float] = None,
        pathao_token: Optional[str] = None,
    ):
        self.sessions = sessions
        self.http = http_client or get_http_client()
        self.pathao_token = settings.pathao_bearer_token if pathao_token is None else pathao_token
        self.timeout_s = timeout_s or settings.courier_http_timeout_s

    async def _session_credentials(self, courier: str) -> Dict[str, str]:
        """세션 획득. 실패하면 빈 자격 증명으로 진행"""
        try:
            session = await self.sessions.acquire(courier)
            return session.credentials
        except CourierCheckException as e:
            logger.warning(f"[DIRECT] {courier} bot error: {e}")
            return {}
        except Exception as e:
            logger.error(f"[DIRECT] {courier} unexpected bot error: {type(e).__name__}: {e}", exc_info=True)
            return {}

    async def build_requests(self, search_term: str) -> Dict[str, CourierRequest]:
        """세 택배사 요청 명세 생성"""
        steadfast_creds, redx_creds = await asyncio.gather(
            self._session_credentials("steadfast"),
            self._session_credentials("redx"),
        )

        cookie_val = steadfast_creds.get("session_cookie_value", "")
        xsrf_val = steadfast_creds.get("xsrf_token_value", "")
        redx_token = redx_creds.get("token", "")

        return {
            "pathao": CourierRequest(
                courier="pathao",
                method="POST",
                url=settings.pathao_lookup_url,
                headers={
                    "Authorization": pathao_authorization(self.pathao_token),
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    "Origin": settings.pathao_origin,
                },
                json_body={"phone": search_term},
            ),
            "redx": CourierRequest(
                courier="redx",
                method="GET",
                url=settings.redx_lookup_url,
                headers={
                    "Authorization": f"Bearer {redx_token}" if redx_token else "",
                    "Accept": "application/json",
                },
                params={"phoneNumber": f"88{search_term}"},
            ),
            "steadfast": CourierRequest(
                courier="steadfast",
                method="GET",
                url=f"{settings.steadfast_lookup_url.rstrip('/')}/{quote(search_term, safe='')}",
                headers={
                    "Cookie": f"steadfast_courier_session={cookie_val}; XSRF-TOKEN={xsrf_val}",
                    "X-XSRF-TOKEN": xsrf_val,
                },
            ),
        }

    async def _execute(self, spec: CourierRequest) -> Optional[str]:
        """요청 하나 실행. 어떤 경우에도 예외를 올리지 않음"""
        try:
            response = await self.http.request(
                spec.method,
                spec.url,
                timeout_s=self.timeout_s,
                headers=spec.headers,
                params=spec.params,
                json_body=spec.json_body,
            )
        except Exception as e:
            logger.warning(f"[DIRECT] {spec.courier} request error: {type(e).__name__}: {e}")
            return None

        if response is None:
            logger.info(f"[DIRECT] {spec.courier} no response")
            return None

        logger.info(f"[DIRECT] {spec.courier} status={response.status_code} len={len(response.text)}")
        return response.text

    async def fetch_all(self, search_term: str) -> RawCourierBodies:
        """세 택배사 동시 조회

        Args:
            search_term: 전화번호

        Returns:
            RawCourierBodies
        """
        logger.info(f"[DIRECT] Fetching couriers for {mask_phone(search_term)}")
        specs = await self.build_requests(search_term)

        names = list(specs.keys())
        bodies = await asyncio.gather(*(self._execute(specs[name]) for name in names))
        by_name = dict(zip(names, bodies))

        return RawCourierBodies(
            steadfast=by_name.get("steadfast"),
            pathao=by_name.get("pathao"),
            redx=by_name.get("redx"),
        )
