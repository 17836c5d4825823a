"""Boundary layer: 네트워크와 분리된 로그인 응답 파싱."""

from .login_parsing import (
    STEADFAST_SESSION_COOKIE,
    XSRF_COOKIE,
    extract_cookie_value,
    extract_csrf_token,
    extract_session_cookies,
    parse_json_object,
)

__all__ = [
    "STEADFAST_SESSION_COOKIE",
    "XSRF_COOKIE",
    "extract_cookie_value",
    "extract_csrf_token",
    "extract_session_cookies",
    "parse_json_object",
]
