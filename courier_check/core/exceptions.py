"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


# 기본 예외 클래스
class CourierCheckException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모

    status_code는 API 응답으로 변환될 때의 HTTP 상태 코드입니다.
    """
    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """API 응답 본문 ({code, message, data})"""
        data: dict[str, Any] = {"status": self.status_code}
        data.update(self.details)
        return {"code": self.error_code, "message": self.message, "data": data}


# 입력 관련 예외
class InputException(CourierCheckException):
    """사용자가 고칠 수 있는 입력 오류"""
    def __init__(self, message: str, error_code: str = "INPUT_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code, 400, details)


class InvalidSearchTermException(InputException):
    """searchTerm 누락/공백"""
    def __init__(self, details: Optional[dict[str, Any]] = None):
        super().__init__("searchTerm is required in the JSON body.", "missing_parameter", details)


# 자격 증명 관련 예외 (운영자가 설정으로 고칠 수 있는 오류)
class CredentialException(CourierCheckException):
    """자격 증명 설정 오류의 기본 클래스"""
    def __init__(self, message: str, error_code: str = "CREDENTIAL_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code, 500, details)


class NoApiKeysException(CredentialException):
    """Hoorin API 키 풀이 비어 있음"""
    def __init__(self, details: Optional[dict[str, Any]] = None):
        super().__init__("No Hoorin API keys are configured.", "no_api_keys", details)


class MissingCredentialsException(CredentialException):
    """택배사 로그인 정보 미설정"""
    def __init__(self, courier: str, details: Optional[dict[str, Any]] = None):
        message = f"{courier} login credentials are not set in settings."
        super().__init__(message, f"{courier}_no_creds", details or {"courier": courier})


# 봇 세션 획득 관련 예외 (direct 경로 내부에서만 처리됨)
class SessionAcquisitionException(CourierCheckException):
    """택배사 세션 획득 실패의 기본 클래스"""
    def __init__(self, courier: str, message: str, error_code: str, details: Optional[dict[str, Any]] = None):
        self.courier = courier
        super().__init__(message, error_code, 502, details or {"courier": courier})


class LoginRequestFailedException(SessionAcquisitionException):
    """로그인 요청 자체가 전송 단계에서 실패"""
    def __init__(self, courier: str, step: str):
        super().__init__(
            courier,
            f"Failed to {step} {courier} login endpoint.",
            f"{courier}_{step.lower()}_failed",
            {"courier": courier, "step": step},
        )


class TokenNotFoundException(SessionAcquisitionException):
    """로그인 페이지에서 _token을 찾지 못함"""
    def __init__(self, courier: str):
        super().__init__(courier, f"Could not find _token on {courier} login page.", f"{courier}_token_not_found")


class LoginFailedException(SessionAcquisitionException):
    """로그인 거부 (자격 증명 오류 등)"""
    def __init__(self, courier: str, reason: str, upstream_body: Optional[str] = None):
        details: dict[str, Any] = {"courier": courier}
        if upstream_body is not None:
            details["upstream_body"] = upstream_body
        super().__init__(courier, f"Login to {courier} failed. {reason}", f"{courier}_login_failed", details)


class CookieParseFailedException(SessionAcquisitionException):
    """로그인은 됐지만 필수 세션 쿠키가 없음"""
    def __init__(self, courier: str, missing: list[str]):
        super().__init__(
            courier,
            f"Login to {courier} succeeded, but could not parse required session cookies.",
            f"{courier}_cookie_parse_failed",
            {"courier": courier, "missing": missing},
        )


# 외부 API 관련 예외
class UpstreamTransportException(CourierCheckException):
    """네트워크/타임아웃 등 전송 계층 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        super().__init__(f"The external API call failed. {reason}".strip(), "api_call_failed", 500, details)


class UpstreamProtocolException(CourierCheckException):
    """상태 코드/응답 형식 오류의 기본 클래스"""
    def __init__(self, message: str, error_code: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code, 502, details)


class ExternalApiException(UpstreamProtocolException):
    """외부 API가 200이 아닌 상태를 반환"""
    def __init__(self, upstream_code: int, upstream_body: Any = None):
        self.upstream_code = upstream_code
        self.upstream_body = upstream_body
        super().__init__(
            "The external API returned an error.",
            "external_api_error",
            {"upstream_code": upstream_code, "upstream_body": upstream_body},
        )


class InvalidJsonException(UpstreamProtocolException):
    """외부 API가 200이지만 JSON이 아닌 본문을 반환"""
    def __init__(self, body: str):
        super().__init__("The external API returned invalid JSON.", "invalid_json", {"body": body})


# 상태 저장소 관련 예외
class StateStoreException(CourierCheckException):
    """Redis 등 상태 저장소 읽기/쓰기 실패"""
    def __init__(self, operation: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"State store {operation} failed: {reason}"
        super().__init__(message, "state_store_error", 500,
                         details or {"operation": operation, "reason": reason})


# 인증/권한 관련 예외 (라이선스 게이트)
class AuthenticationException(CourierCheckException):
    """Authorization 헤더 누락/형식 오류"""
    def __init__(self, message: str):
        super().__init__(message, "401_unauthorized", 401)


class PermissionDeniedException(CourierCheckException):
    """라이선스가 유효하지 않거나 권한 없음"""
    def __init__(self, message: str):
        super().__init__(message, "403_forbidden", 403)
