"""택배사 로그인 세션 저장소

봇이 로그인으로 얻은 세션(쿠키/토큰)을 택배사별로 캐시합니다.
- 캐시에 살아있는 세션이 있으면 네트워크 호출 없이 반환
- 없거나 만료되면 해당 택배사 봇으로 한 번만 로그인 (재시도 없음)
- 같은 프로세스 안에서 동시 요청이 중복 로그인하지 않도록 택배사별 Lock 사용
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import asdict, dataclass, field
from typing import Dict, Optional, Protocol

from courier_check.core.config import settings
from courier_check.core.exceptions import StateStoreException
from courier_check.core.logging import logger
from courier_check.services import StateStore
from courier_check.utils.hash_utils import generate_session_key


@dataclass
class CourierSession:
    """택배사 하나의 세션 자격 증명 묶음"""

    courier: str
    credentials: Dict[str, str] = field(default_factory=dict)
    acquired_at: float = 0.0
    ttl_seconds: int = 21600

    def is_expired(self, now: Optional[float] = None) -> bool:
        now = time.time() if now is None else now
        return now >= self.acquired_at + self.ttl_seconds

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> Optional["CourierSession"]:
        try:
            return cls(
                courier=str(data["courier"]),
                credentials={str(k): str(v) for k, v in dict(data["credentials"]).items()},
                acquired_at=float(data["acquired_at"]),
                ttl_seconds=int(data["ttl_seconds"]),
            )
        except (KeyError, TypeError, ValueError):
            return None


class LoginBot(Protocol):
    """택배사 로그인 봇 인터페이스"""

    courier: str

    async def login(self) -> Dict[str, str]:
        """로그인 후 세션 자격 증명 반환 (실패 시 SessionAcquisitionException)"""
        ...


class SessionStore:
    """택배사별 세션 캐시 + 봇 로그인 위임"""

    def __init__(
        self,
        store: StateStore,
        bots: Dict[str, LoginBot],
        ttl_seconds: Optional[int] = None,
    ):
        self.store = store
        self.bots = dict(bots)
        self.ttl_seconds = ttl_seconds or settings.courier_session_ttl_s
        self._locks: Dict[str, asyncio.Lock] = {name: asyncio.Lock() for name in self.bots}

    def _read_cached(self, courier: str) -> Optional[CourierSession]:
        try:
            raw = self.store.get_json(generate_session_key(courier))
        except StateStoreException as e:
            # 세션 캐시를 못 읽으면 로그인으로 진행
            logger.warning(f"[SESSION] {courier} cache read failed: {e}")
            return None
        if not isinstance(raw, dict):
            return None
        session = CourierSession.from_dict(raw)
        if session is None or session.courier != courier or session.is_expired():
            return None
        return session

    async def acquire(self, courier: str) -> CourierSession:
        """캐시된 세션을 반환하거나 새로 로그인

        Args:
            courier: 택배사 식별자 (bots에 등록된 이름)

        Returns:
            CourierSession

        Raises:
            KeyError: 등록되지 않은 택배사
            CredentialException / SessionAcquisitionException: 로그인 실패
        """
        bot = self.bots[courier]

        cached = self._read_cached(courier)
        if cached is not None:
            logger.debug(f"[SESSION] {courier} cache hit")
            return cached

        async with self._locks[courier]:
            # Lock 대기 중에 다른 요청이 로그인했을 수 있음
            cached = self._read_cached(courier)
            if cached is not None:
                return cached

            logger.info(f"[SESSION] {courier} cache miss, running login bot")
            credentials = await bot.login()
            session = CourierSession(
                courier=courier,
                credentials=credentials,
                acquired_at=time.time(),
                ttl_seconds=self.ttl_seconds,
            )
            try:
                self.store.set_json(generate_session_key(courier), session.to_dict(), self.ttl_seconds)
            except StateStoreException as e:
                # 저장 실패해도 이번 요청에는 세션 사용
                logger.warning(f"[SESSION] {courier} cache write failed: {e}")
            logger.info(f"[SESSION] {courier} session acquired (ttl={self.ttl_seconds}s)")
            return session
