"""봇 로그인 - HTML/쿠키/JSON 파싱 유틸.

네트워크와 분리된 순수 파싱 로직입니다.
찾지 못한 경우는 예외가 아니라 None으로 표현합니다.
"""

from __future__ import annotations

import json
import re
from typing import Dict, Iterable, Optional

from selectolax.parser import HTMLParser

from courier_check.core.logging import logger


STEADFAST_SESSION_COOKIE = "steadfast_courier_session"
XSRF_COOKIE = "XSRF-TOKEN"

# selectolax 파싱이 실패하는 깨진 HTML 대비
_TOKEN_INPUT_RE = re.compile(r'<input[^>]+name="_token"[^>]+value="([^"]+)"')


def extract_csrf_token(html: str) -> Optional[str]:
    """로그인 페이지 HTML에서 _token 값 추출

    1순위: <input name="_token" value="...">
    2순위: <meta name="csrf-token" content="...">
    """
    if not html:
        return None

    try:
        tree = HTMLParser(html)
        node = tree.css_first('input[name="_token"]')
        if node is not None:
            value = (node.attributes.get("value") or "").strip()
            if value:
                return value
        meta = tree.css_first('meta[name="csrf-token"]')
        if meta is not None:
            value = (meta.attributes.get("content") or "").strip()
            if value:
                return value
    except Exception as e:
        logger.debug(f"[LOGIN_PARSE] selectolax token lookup failed: {type(e).__name__}: {e}")

    match = _TOKEN_INPUT_RE.search(html)
    return match.group(1) if match else None


def extract_cookie_value(set_cookie_headers: Iterable[str], name: str) -> Optional[str]:
    """Set-Cookie 헤더 목록에서 특정 쿠키 값 추출

    헤더가 여러 줄로 반복되거나 콤마로 접혀(fold) 들어와도 처리합니다.
    같은 이름이 여러 번 나오면 마지막 값을 사용합니다.
    """
    pattern = re.compile(r"(?:^|[\s,;])" + re.escape(name) + r"=([^;,\s]+)")
    found: Optional[str] = None
    for header in set_cookie_headers:
        if not header:
            continue
        for match in pattern.finditer(header):
            found = match.group(1)
    return found


def extract_session_cookies(set_cookie_headers: Iterable[str], names: Iterable[str]) -> Dict[str, str]:
    """필요한 쿠키들 중 찾은 것만 {name: value}로 반환"""
    headers = list(set_cookie_headers)
    result: Dict[str, str] = {}
    for name in names:
        value = extract_cookie_value(headers, name)
        if value:
            result[name] = value
    return result


def parse_json_object(body: str) -> Optional[dict]:
    """JSON 객체 본문만 dict로 반환 (그 외 None)"""
    if not body:
        return None
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, TypeError, ValueError):
        return None
    return data if isinstance(data, dict) else None
