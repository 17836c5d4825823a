"""Courier 연동 모듈 (봇 로그인 + 동시 조회 + Hoorin 키 풀).

공개 API는 이 파일에서만 export합니다.
"""

from .direct_fetcher import CourierRequest, DirectCourierFetcher, RawCourierBodies
from .hoorin_client import HoorinClient
from .http_client import CourierHttpClient, HttpResponse, get_http_client
from .key_rotator import KeyRotator, parse_key_pool
from .redx_bot import RedxLoginBot
from .sessions import CourierSession, SessionStore
from .steadfast_bot import SteadfastLoginBot

__all__ = [
    "CourierRequest",
    "DirectCourierFetcher",
    "RawCourierBodies",
    "HoorinClient",
    "CourierHttpClient",
    "HttpResponse",
    "get_http_client",
    "KeyRotator",
    "parse_key_pool",
    "RedxLoginBot",
    "CourierSession",
    "SessionStore",
    "SteadfastLoginBot",
]
