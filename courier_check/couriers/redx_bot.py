"""RedX 로그인 봇 (JSON API 로그인 → access_token)"""

from __future__ import annotations

from typing import Dict, Optional

from courier_check.core.config import settings
from courier_check.core.exceptions import (
    LoginFailedException,
    LoginRequestFailedException,
    MissingCredentialsException,
)
from courier_check.core.logging import logger
from courier_check.couriers.boundary import parse_json_object
from courier_check.couriers.http_client import CourierHttpClient, get_http_client


class RedxLoginBot:
    """RedX 세션 획득 봇"""

    courier = "redx"

    def __init__(
        self,
        http_client: Optional[CourierHttpClient] = None,
        phone: Optional[str] = None,
        password: Optional[str] = None,
        login_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.http = http_client or get_http_client()
        self.phone = settings.redx_phone if phone is None else phone
        self.password = settings.redx_password if password is None else password
        self.login_url = login_url or settings.redx_login_url
        self.timeout_s = timeout_s or settings.courier_http_timeout_s

    async def login(self) -> Dict[str, str]:
        """로그인 후 {token} 반환"""
        if not self.phone or not self.password:
            raise MissingCredentialsException(self.courier)

        response = await self.http.post(
            self.login_url,
            timeout_s=self.timeout_s,
            json_body={"phone": self.phone, "password": self.password},
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )
        if response is None:
            raise LoginRequestFailedException(self.courier, "POST")

        data = parse_json_object(response.text) or {}
        token = data.get("access_token")
        if response.status_code != 200 or not isinstance(token, str) or not token:
            message = data.get("message")
            reason = message if isinstance(message, str) and message else "Login failed. Check credentials."
            raise LoginFailedException(self.courier, reason, upstream_body=response.text)

        logger.info("[SESSION] redx login OK")
        return {"token": token}
