"""데이터베이스 모델"""
from sqlalchemy import Column, Integer, String, DateTime
from courier_check.core.database import Base


class License(Base):
    """라이선스 테이블 (발급/활성화는 외부 관리 도구가 담당)

    이 서비스는 courier API 권한 확인을 위해 읽기만 하고,
    만료된 키의 status를 'expired'로 갱신하는 것만 수행합니다.
    """

    __tablename__ = "licenses"

    id = Column(Integer, primary_key=True, index=True)
    license_key = Column(String, nullable=False, unique=True, index=True)
    status = Column(String, nullable=False, default="active", index=True)  # active, inactive, expired
    expires_at = Column(DateTime, nullable=True)  # NULL이면 평생 라이선스
    allow_courier_api = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<License(id={self.id}, status={self.status})>"
