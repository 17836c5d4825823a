"""설정 관리 - 환경 변수 로드 및 검증"""
from pydantic_settings import BaseSettings
from pydantic import field_validator


DATA_SOURCE_ALIASES = {
    "pool": "pool",
    "hoorin": "pool",
    "direct": "direct",
}


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 데이터베이스 (라이선스 조회용)
    database_url: str = ""

    # Redis (결과 캐시 / 세션 캐시 / 키 로테이션 커서)
    redis_url: str = ""

    # 데이터 소스: pool(Hoorin 키 풀) | direct(택배사 직접 조회)
    data_source: str = "pool"

    # 결과 캐시 유지 시간(시간 단위). 0이면 캐시 비활성화
    cache_duration: int = 6

    # Hoorin 어그리게이터
    # 여러 키를 줄바꿈으로 구분해서 넣습니다.
    hoorin_api_keys: str = ""
    hoorin_api_url: str = "https://dash.hoorin.com/api/courier/news.php"

    # Steadfast (HTML 로그인)
    steadfast_email: str = ""
    steadfast_password: str = ""
    steadfast_login_url: str = "https://steadfast.com.bd/login"
    steadfast_lookup_url: str = "https://steadfast.com.bd/user/consignment/getbyphone"

    # RedX (API 로그인)
    redx_phone: str = ""
    redx_password: str = ""
    redx_login_url: str = "https://api.redx.com.bd/v4/auth/login"
    redx_lookup_url: str = (
        "https://redx.com.bd/api/redx_se/admin/parcel/customer-success-return-rate"
    )

    # Pathao (고정 토큰)
    pathao_bearer_token: str = ""
    pathao_lookup_url: str = "https://merchant.pathao.com/api/v1/user/success"
    pathao_origin: str = "https://merchant.pathao.com"

    # 외부 HTTP 호출
    courier_http_timeout_s: float = 15.0
    courier_http_impersonate: str = "chrome110"
    courier_user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

    # 봇 로그인 세션 유지 시간 (6시간)
    courier_session_ttl_s: int = 21600

    # API
    api_title: str = "Courier Check Service"
    api_version: str = "1.0.0"
    api_description: str = "전화번호 기준 택배사별 배송 성공/취소 이력을 통합 조회합니다."
    # 쉼표로 구분. "*"이면 전체 허용
    cors_allow_origins: str = "*"

    # 로깅
    log_level: str = "INFO"

    @field_validator("data_source")
    @classmethod
    def validate_data_source(cls, v: str) -> str:
        key = (v or "").strip().lower()
        if key not in DATA_SOURCE_ALIASES:
            raise ValueError(f"data_source must be one of {sorted(DATA_SOURCE_ALIASES)}")
        return DATA_SOURCE_ALIASES[key]

    @field_validator("cache_duration")
    @classmethod
    def validate_cache_duration(cls, v: int) -> int:
        if v < 0:
            raise ValueError("cache_duration must be >= 0")
        return v

    @field_validator("courier_http_timeout_s")
    @classmethod
    def validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("courier_http_timeout_s must be positive")
        return v

    @field_validator("courier_session_ttl_s")
    @classmethod
    def validate_session_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("courier_session_ttl_s must be positive")
        return v

    @field_validator("database_url", "redis_url")
    @classmethod
    def validate_required_urls(cls, v: str) -> str:
        if not v:
            raise ValueError("database_url and redis_url must not be empty")
        return v

    @property
    def cors_origins(self) -> list[str]:
        origins = [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]
        return origins or ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
