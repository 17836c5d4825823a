"""텍스트 정리 유틸리티"""
import re

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_text_field(value: str) -> str:
    """사용자 입력 한 줄 정리

    - HTML 태그 제거
    - 줄바꿈/탭/연속 공백을 공백 하나로
    - 앞뒤 공백 제거

    Args:
        value: 원본 문자열

    Returns:
        정리된 문자열 (None/빈 값이면 "")
    """
    if not value:
        return ""
    cleaned = _TAG_RE.sub("", value)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned)
    return cleaned.strip()
