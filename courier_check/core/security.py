"""
라이선스 Bearer 토큰 게이트
courier-check 엔드포인트 호출 전 라이선스 유효성과 courier API 권한을 확인합니다.
"""

from datetime import datetime
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from courier_check.core.database import get_db
from courier_check.core.exceptions import AuthenticationException, PermissionDeniedException
from courier_check.core.logging import logger, sanitize_for_log
from courier_check.repositories import LicenseRepository


def get_license_repository(db: Session = Depends(get_db)) -> LicenseRepository:
    """FastAPI Dependency: LicenseRepository 제공"""
    return LicenseRepository(db)


def extract_bearer_key(auth_header: Optional[str]) -> str:
    """Authorization 헤더에서 라이선스 키 추출

    Args:
        auth_header: Authorization 헤더 원문

    Returns:
        라이선스 키

    Raises:
        AuthenticationException: 헤더 누락/형식 오류/빈 키
    """
    if not auth_header:
        raise AuthenticationException("Authorization header is missing.")

    parts = auth_header.strip().split(None, 1)
    if len(parts) == 0 or parts[0] != "Bearer":
        raise AuthenticationException('Authorization header is malformed. Expected "Bearer <KEY>".')

    # "Bearer <KEY>" 에서 첫 번째 토큰만 키로 사용
    license_key = parts[1].split()[0] if len(parts) > 1 and parts[1].strip() else ""
    if not license_key:
        raise AuthenticationException("No license key provided in Authorization header.")
    return license_key


async def require_courier_access(
    request: Request,
    repo: LicenseRepository = Depends(get_license_repository),
) -> str:
    """courier API 권한 확인 (FastAPI Dependency)

    Returns:
        검증된 라이선스 키

    Raises:
        AuthenticationException: 401
        PermissionDeniedException: 403
    """
    license_key = extract_bearer_key(request.headers.get("authorization"))

    license_row = repo.get_by_key(license_key)
    if license_row is None or license_row.status != "active":
        logger.warning(f"[AUTH] Rejected license: {sanitize_for_log(license_key[:4] + '...')}")
        raise PermissionDeniedException("Invalid or unauthorized license.")

    if license_row.expires_at is not None and datetime.now() > license_row.expires_at:
        repo.mark_expired(license_row)
        raise PermissionDeniedException("This license has expired.")

    if int(license_row.allow_courier_api or 0) != 1:
        raise PermissionDeniedException(
            "This license does not have permission to access the courier API."
        )

    logger.debug(f"[AUTH] License accepted: id={license_row.id}")
    return license_key
