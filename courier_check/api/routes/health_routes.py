"""헬스 체크 엔드포인트"""
from fastapi import APIRouter

from courier_check.api.routes.courier_routes import get_state_store
from courier_check.core.database import engine
from courier_check.core.exceptions import StateStoreException
from courier_check.core.logging import logger
from courier_check.schemas import HealthResponse
from courier_check import __version__

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    헬스 체크 엔드포인트

    - Redis 연결 상태
    - DB 연결 상태
    """
    redis_ok = False
    db_ok = False

    try:
        redis_ok = get_state_store().health_check()
    except StateStoreException as e:
        logger.warning(f"State store connection failed: {e.error_code}")
    except Exception as e:
        logger.error(f"Unexpected state store error: {e}")

    try:
        with engine.connect() as connection:
            connection.exec_driver_sql("SELECT 1")
            db_ok = True
    except Exception as e:
        logger.error(f"Database connection error: {e}")

    status = "ok" if redis_ok and db_ok else ("degraded" if redis_ok or db_ok else "error")

    return HealthResponse(
        status=status,
        redis=redis_ok,
        database=db_ok,
        version=__version__,
    )


@router.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "service": "Courier Check Service",
        "version": __version__,
        "docs": "/docs"
    }
