"""Pydantic 스키마 정의

- 인바운드 요청
- 택배사별 응답 스키마 (택배사마다 구조가 달라 각각 따로 정의)
"""
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, field_validator

from courier_check.utils.text_utils import sanitize_text_field


class CourierCheckRequest(BaseModel):
    """배송 이력 조회 요청

    searchTerm 누락/공백 검증은 Dispatcher가 담당합니다. (400 missing_parameter)
    """
    model_config = ConfigDict(populate_by_name=True)

    search_term: Optional[str] = Field(None, alias="searchTerm", max_length=64, description="조회할 전화번호")

    @field_validator("search_term", mode="before")
    @classmethod
    def coerce_search_term(cls, v: Any) -> Optional[str]:
        """숫자로 들어온 전화번호도 허용, 태그/공백 정리"""
        if v is None:
            return None
        if isinstance(v, bool):
            return ""
        if isinstance(v, (int, float)):
            v = str(v)
        if not isinstance(v, str):
            return ""
        return sanitize_text_field(v)


# ============================================================================
# 택배사별 응답 스키마
# ============================================================================

class _UpstreamModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SteadfastStats(_UpstreamModel):
    """Steadfast: {total_delivered, total_cancelled}"""
    total_delivered: NonNegativeInt
    total_cancelled: NonNegativeInt


class RedxParcelData(_UpstreamModel):
    totalParcels: NonNegativeInt
    deliveredParcels: NonNegativeInt


class RedxStats(_UpstreamModel):
    """RedX: {data: {totalParcels, deliveredParcels}}"""
    data: RedxParcelData


class PathaoCustomer(_UpstreamModel):
    total_delivery: NonNegativeInt
    successful_delivery: NonNegativeInt


class PathaoData(_UpstreamModel):
    customer: PathaoCustomer


class PathaoStats(_UpstreamModel):
    """Pathao: {data: {customer: {total_delivery, successful_delivery}}}"""
    data: PathaoData


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    status: str
    redis: bool
    database: bool
    version: str
