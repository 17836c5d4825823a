"""Normalizer - 세 택배사 응답을 Summaries 포맷으로 통일

어떤 입력 조합(없음/깨진 JSON/정상)에도 실패하지 않으며,
파싱에 실패한 택배사는 0으로 채워진 기본값을 유지합니다.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import ValidationError

from courier_check.core.logging import logger
from courier_check.schemas.courier_schema import PathaoStats, RedxStats, SteadfastStats


def _empty_summaries() -> Dict[str, Dict[str, int]]:
    return {
        "Steadfast": {
            "Total Parcels": 0,
            "Delivered Parcels": 0,
            "Canceled Parcels": 0,
        },
        "RedX": {
            "Total Parcels": 0,
            "Delivered Parcels": 0,
            "Canceled Parcels": 0,
        },
        "Pathao": {
            "Total Delivery": 0,
            "Successful Delivery": 0,
            "Canceled Delivery": 0,
        },
    }


def _parse(model: Any, body: Optional[str]) -> Optional[Any]:
    if not body:
        return None
    try:
        return model.model_validate_json(body)
    except (ValidationError, ValueError, TypeError) as e:
        logger.debug(f"[NORMALIZE] {model.__name__} parse failed: {type(e).__name__}")
        return None


def _parcel_counts(total: int, delivered: int, canceled: Optional[int] = None) -> tuple[int, int, int]:
    """취소 건수가 없으면 total - delivered 로 계산 (음수는 0)"""
    if canceled is None:
        canceled = max(total - delivered, 0)
    return total, delivered, canceled


def normalize_responses(
    steadfast_body: Optional[str],
    pathao_body: Optional[str],
    redx_body: Optional[str],
) -> Dict[str, Any]:
    """세 택배사 원본 응답을 Summaries 포맷으로 변환

    Args:
        steadfast_body: Steadfast 응답 본문 (없으면 None)
        pathao_body: Pathao 응답 본문 (없으면 None)
        redx_body: RedX 응답 본문 (없으면 None)

    Returns:
        {"Summaries": {...}, "_debug_raw_responses": {...}}
    """
    summaries = _empty_summaries()

    steadfast = _parse(SteadfastStats, steadfast_body)
    if steadfast is not None:
        # Steadfast는 배송/취소만 주므로 합계를 계산
        delivered = steadfast.total_delivered
        canceled = steadfast.total_cancelled
        total, delivered, canceled = _parcel_counts(delivered + canceled, delivered, canceled)
        summaries["Steadfast"] = {
            "Total Parcels": total,
            "Delivered Parcels": delivered,
            "Canceled Parcels": canceled,
        }

    redx = _parse(RedxStats, redx_body)
    if redx is not None:
        total, delivered, canceled = _parcel_counts(redx.data.totalParcels, redx.data.deliveredParcels)
        summaries["RedX"] = {
            "Total Parcels": total,
            "Delivered Parcels": delivered,
            "Canceled Parcels": canceled,
        }

    pathao = _parse(PathaoStats, pathao_body)
    if pathao is not None:
        customer = pathao.data.customer
        total, delivered, canceled = _parcel_counts(customer.total_delivery, customer.successful_delivery)
        summaries["Pathao"] = {
            "Total Delivery": total,
            "Successful Delivery": delivered,
            "Canceled Delivery": canceled,
        }

    return {
        "Summaries": summaries,
        "_debug_raw_responses": {
            "steadfast_input": steadfast_body,
            "pathao_input": pathao_body,
            "redex_input": redx_body,
        },
    }
