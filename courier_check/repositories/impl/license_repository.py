"""라이선스 리포지토리 - DB 접근 로직"""
from typing import Optional
from sqlalchemy.orm import Session

from courier_check.repositories.models import License
from courier_check.core.logging import logger
from courier_check.core.exceptions import StateStoreException


class LicenseRepository:
    """라이선스 데이터 액세스 레이어"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_key(self, license_key: str) -> Optional[License]:
        """라이선스 키로 조회"""
        return self.db.query(License).filter(License.license_key == license_key).first()

    def mark_expired(self, license_row: License) -> None:
        """만료된 라이선스 상태를 expired로 갱신"""
        try:
            license_row.status = "expired"
            self.db.commit()
            logger.info(f"License marked expired: id={license_row.id}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to mark license expired: {e}")
            raise StateStoreException("license update", str(e))
