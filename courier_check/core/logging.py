"""로깅 설정 (Security Enhanced)

택배사 로그인 정보, Hoorin apiKey, 세션 쿠키가 로그로 새지 않도록
모든 레코드에 마스킹 필터를 겁니다.
"""
import logging
import os
import re
import sys

from courier_check.core.config import settings


IS_PRODUCTION = os.getenv("ENVIRONMENT", "development") == "production"

_FORMATS = {
    # Production: 최소 정보만
    True: "%(asctime)s - %(levelname)s - %(message)s",
    False: "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
}

# key=value / "key": "value" 형태의 비밀 값
_SECRET_PAIR_RE = re.compile(
    r"""(?i)(["']?(?:apikey|api_key|password|access_token|token|xsrf-token|"""
    r"""steadfast_courier_session|authorization)["']?\s*[:=]\s*["']?)(?:bearer\s+)?[^"'&;,\s}]+"""
)


def mask_secrets(text: str) -> str:
    """문자열 안의 비밀 값만 *** 로 치환"""
    if not text:
        return text
    return _SECRET_PAIR_RE.sub(lambda m: m.group(1) + "***", text)


class SecretMaskingFilter(logging.Filter):
    """로그 메시지의 비밀 값 마스킹"""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            return True
        masked = mask_secrets(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def _resolve_level() -> int:
    level_name = settings.log_level.upper()
    # Production에서는 최소 INFO
    if IS_PRODUCTION and level_name == "DEBUG":
        level_name = "INFO"
    return getattr(logging, level_name, logging.INFO)


def setup_logging() -> logging.Logger:
    """courier_check 로거 초기화 (중복 핸들러 방지)"""
    logger = logging.getLogger("courier_check")
    level = _resolve_level()
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt=_FORMATS[IS_PRODUCTION], datefmt="%Y-%m-%d %H:%M:%S"))
        handler.addFilter(SecretMaskingFilter())
        logger.addHandler(handler)

    return logger


logger = setup_logging()


def sanitize_for_log(value: str, max_length: int = 100) -> str:
    """사용자 입력을 로그에 남길 때 사용 (비밀 값 마스킹 + 길이 제한)

    Args:
        value: 로깅할 문자열
        max_length: 최대 길이

    Returns:
        정리된 문자열
    """
    if not value:
        return "[empty]"

    result = mask_secrets(value)
    if len(result) > max_length:
        result = result[:max_length] + "..."
    return result


def mask_phone(phone: str) -> str:
    """전화번호 뒤 4자리만 남기고 마스킹"""
    if not phone:
        return "[empty]"
    if len(phone) <= 4:
        return "*" * len(phone)
    return "*" * (len(phone) - 4) + phone[-4:]
