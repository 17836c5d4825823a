"""예외 → JSON 응답 변환"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from courier_check.core.exceptions import CourierCheckException, InvalidSearchTermException
from courier_check.core.logging import logger


async def handle_courier_check_exception(request: Request, exc: CourierCheckException) -> JSONResponse:
    """
    CourierCheckException 처리

    Args:
        request: FastAPI request object
        exc: CourierCheckException instance

    Returns:
        JSONResponse: {code, message, data: {status, ...}}
    """
    if exc.status_code >= 500:
        logger.error(f"[API] {exc}")
    else:
        logger.warning(f"[API] {exc}")

    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """JSON 본문이 없거나 깨진 요청도 missing_parameter(400)로 응답"""
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
    return await handle_courier_check_exception(request, InvalidSearchTermException({"errors": errors}))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CourierCheckException, handle_courier_check_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
