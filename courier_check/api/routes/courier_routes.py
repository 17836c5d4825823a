"""Courier Check Routes

HTTP Layer는 요청을 Dispatcher로 넘기는 단순한 Translator 역할만 수행합니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from courier_check.core.logging import logger
from courier_check.core.security import require_courier_access
from courier_check.couriers import (
    DirectCourierFetcher,
    HoorinClient,
    KeyRotator,
    RedxLoginBot,
    SessionStore,
    SteadfastLoginBot,
    get_http_client,
)
from courier_check.engine import CourierCheckDispatcher, ResultCache
from courier_check.schemas import CourierCheckRequest
from courier_check.services import RedisStateStore, StateStore

router = APIRouter(prefix="/courier-check/v1", tags=["courier-check"])

# 싱글톤 서비스
_state_store: Optional[RedisStateStore] = None
_dispatcher: Optional[CourierCheckDispatcher] = None


def get_state_store() -> RedisStateStore:
    """RedisStateStore 싱글톤"""
    global _state_store
    if _state_store is None:
        _state_store = RedisStateStore()
    return _state_store


def build_dispatcher(store: StateStore) -> CourierCheckDispatcher:
    """StateStore 하나로 모든 컴포넌트 조립"""
    http_client = get_http_client()
    sessions = SessionStore(
        store,
        bots={
            SteadfastLoginBot.courier: SteadfastLoginBot(http_client),
            RedxLoginBot.courier: RedxLoginBot(http_client),
        },
    )
    return CourierCheckDispatcher(
        result_cache=ResultCache(store),
        hoorin_client=HoorinClient(KeyRotator(store), http_client),
        direct_fetcher=DirectCourierFetcher(sessions, http_client),
    )


def get_dispatcher(
    store: RedisStateStore = Depends(get_state_store),
) -> CourierCheckDispatcher:
    """CourierCheckDispatcher 싱글톤"""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = build_dispatcher(store)
    return _dispatcher


@router.post("/status")
async def courier_status(
    request: CourierCheckRequest,
    _license_key: str = Depends(require_courier_access),
    dispatcher: CourierCheckDispatcher = Depends(get_dispatcher),
):
    """전화번호 기준 택배사별 배송 이력 조회

    Flow:
        1. 라이선스 게이트 통과
        2. Dispatcher에 위임 (캐시 → pool | direct)
        3. 실패는 CourierCheckException 핸들러가 {code, message, data}로 변환
    """
    logger.info("[API] courier status request")
    return await dispatcher.handle(request.search_term)
