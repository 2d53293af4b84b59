"""전역 예외 처리기 — 처리되지 않은 예외를 로그로 남기고 500 응답.

Global exception handler. HTTPException subclasses from
eventforge.utils.exceptions are handled by FastAPI itself; anything else
is logged with the request context and answered with a generic 500.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """처리되지 않은 예외를 로그로 남기고 500 JSON 응답을 반환합니다."""
    logger.error(
        "Unhandled exception in %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
        extra={
            "method": request.method,
            "path": request.url.path,
            "error_type": type(exc).__name__,
        },
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """애플리케이션에 예외 처리기를 등록합니다."""
    app.add_exception_handler(Exception, global_exception_handler)
