"""FastAPI 앱 팩토리"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from courier_check.api import courier_router, health_router, register_exception_handlers
from courier_check.core.config import settings
from courier_check.core.database import init_db
from courier_check.core.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """라이선스 테이블 준비 후 요청 수신"""
    init_db()
    logger.info(
        f"[APP] courier-check up (data_source={settings.data_source}, "
        f"cache={settings.cache_duration}h)"
    )
    yield
    logger.info("[APP] courier-check shutting down")


def create_app() -> FastAPI:
    """
    FastAPI 앱 생성

    Returns:
        FastAPI 앱 인스턴스 (라우터/예외 핸들러 등록 완료)
    """
    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
    )

    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # 와일드카드 origin과 credentials는 함께 쓸 수 없음
        allow_credentials=origins != ["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type"],
    )

    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(courier_router)
    return app


# uvicorn courier_check.app:app
app = create_app()
