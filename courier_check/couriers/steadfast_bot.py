"""Steadfast 로그인 봇 (HTML 폼 로그인 + Set-Cookie 파싱)

1. GET 로그인 페이지 → 초기 쿠키와 _token 확보
2. POST {_token, email, password} (초기 쿠키 동봉, 리다이렉트 미추적)
3. Set-Cookie에서 steadfast_courier_session / XSRF-TOKEN 추출
"""

from __future__ import annotations

from typing import Dict, Optional

from courier_check.core.config import settings
from courier_check.core.exceptions import (
    CookieParseFailedException,
    LoginFailedException,
    LoginRequestFailedException,
    MissingCredentialsException,
    TokenNotFoundException,
)
from courier_check.core.logging import logger
from courier_check.couriers.boundary import (
    STEADFAST_SESSION_COOKIE,
    XSRF_COOKIE,
    extract_csrf_token,
    extract_session_cookies,
)
from courier_check.couriers.http_client import CourierHttpClient, get_http_client


class SteadfastLoginBot:
    """Steadfast 세션 획득 봇"""

    courier = "steadfast"

    def __init__(
        self,
        http_client: Optional[CourierHttpClient] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
        login_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.http = http_client or get_http_client()
        self.email = settings.steadfast_email if email is None else email
        self.password = settings.steadfast_password if password is None else password
        self.login_url = login_url or settings.steadfast_login_url
        self.timeout_s = timeout_s or settings.courier_http_timeout_s

    async def login(self) -> Dict[str, str]:
        """로그인 후 {session_cookie_value, xsrf_token_value} 반환"""
        # Part A: 로그인 페이지에서 _token과 초기 쿠키 확보
        page = await self.http.get(self.login_url, timeout_s=self.timeout_s)
        if page is None:
            raise LoginRequestFailedException(self.courier, "GET")

        token = extract_csrf_token(page.text)
        if not token:
            raise TokenNotFoundException(self.courier)

        if not self.email or not self.password:
            raise MissingCredentialsException(self.courier)

        # Part B: 로그인 시도
        result = await self.http.post(
            self.login_url,
            timeout_s=self.timeout_s,
            data={"_token": token, "email": self.email, "password": self.password},
            cookies=page.cookies,
            follow_redirects=False,
        )
        if result is None:
            raise LoginRequestFailedException(self.courier, "POST")

        # Part C: Set-Cookie 파싱
        if not result.set_cookie:
            raise LoginFailedException(self.courier, "No session cookies were set. (Check credentials)")

        required = (STEADFAST_SESSION_COOKIE, XSRF_COOKIE)
        found = extract_session_cookies(result.set_cookie, required)
        missing = [name for name in required if name not in found]
        if missing:
            raise CookieParseFailedException(self.courier, missing)

        logger.info(f"[SESSION] steadfast login OK (status={result.status_code})")
        return {
            "session_cookie_value": found[STEADFAST_SESSION_COOKIE],
            "xsrf_token_value": found[XSRF_COOKIE],
        }
