"""해싱/키 생성 유틸리티"""
import hashlib


def hash_string(text: str) -> str:
    """
    문자열을 MD5 해시로 변환

    Args:
        text: 해시할 문자열

    Returns:
        MD5 해시 문자열
    """
    return hashlib.md5(text.encode()).hexdigest()


def generate_result_cache_key(search_term: str) -> str:
    """
    검색어(전화번호)로 결과 캐시 키 생성

    Args:
        search_term: 검색어

    Returns:
        Redis 캐시 키
    """
    return f"courier:result:{hash_string(search_term)}"


def generate_session_key(courier: str) -> str:
    """택배사별 로그인 세션 키 (택배사 간 공유 금지)"""
    return f"courier:session:{courier}"


KEY_INDEX_KEY = "courier:hoorin:key_index"
