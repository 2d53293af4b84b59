"""Axiom API 로깅 미들웨어.

Ships one structured event per API request to Axiom: method, path,
query params, masked JSON body, status, duration and error detail.
Password fields and verification/refresh tokens (including the ?token=
query of the email links) are masked. Multipart image uploads are not
read; only their size is recorded.
"""

import json
import logging
import re
import time
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from axiom_py import Client as AxiomClient

from eventforge.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 필드 패턴 — Fields to mask in request/response bodies
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential|bullstat)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:20]]
    return data


def _truncate(value: Any, max_len: int = 2000) -> Any:
    """로그 크기 제한 — Truncate large values to prevent oversized logs."""
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value


_BODY_METHODS: frozenset[str] = frozenset({"POST", "PUT", "PATCH"})


async def _read_request_body(request: Request) -> Any:
    """로그용 요청 본문 — JSON은 마스킹, multipart는 크기만 기록."""
    if request.method not in _BODY_METHODS:
        return None
    if request.headers.get("content-type", "").startswith("multipart/"):
        # 이미지 업로드 본문은 읽지 않음 — Upload bodies are not logged
        return f"(multipart, {request.headers.get('content-length', '?')} bytes)"
    body_bytes: bytes = await request.body()
    if not body_bytes:
        return None
    try:
        return _truncate(_mask_dict(json.loads(body_bytes)))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return "(non-json body)"


async def _capture_error(response: Response) -> tuple[Response, str]:
    """에러 응답 본문에서 detail을 추출하고, 소비한 본문으로 응답을 다시 만듭니다."""
    resp_body: bytes = b""
    async for chunk in response.body_iterator:
        resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

    try:
        detail = json.loads(resp_body).get("detail", "")
        error_detail: str = detail if isinstance(detail, str) else json.dumps(detail, ensure_ascii=False)
    except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
        error_detail = resp_body.decode("utf-8", errors="replace")

    rebuilt: Response = Response(
        content=resp_body,
        status_code=response.status_code,
        headers=dict(response.headers),
        media_type=response.media_type,
    )
    return rebuilt, error_detail[:500]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs every API request to Axiom when AXIOM_API_TOKEN
    and AXIOM_DATASET are set; otherwise it is a pass-through.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    def _ingest(self, log_event: dict[str, Any]) -> None:
        try:
            self._client.ingest_events(self._dataset, [log_event])
        except Exception:
            # 로깅 실패가 요청 처리에 영향주지 않도록 — Ingest failures never fail the request
            logger.warning("Axiom ingest failed for %s %s", log_event["method"], log_event["path"], exc_info=True)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 제외 경로 및 Axiom 미설정시 패스스루 — Skip excluded paths or when Axiom is off
        if self._client is None or request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time: float = time.time()
        log_event: dict[str, Any] = {
            "app": settings.APP_NAME,
            "method": request.method,
            "path": request.url.path,
            "status_code": 500,
        }
        if request.query_params:
            # 이메일 링크의 ?token= 값도 마스킹됨 (Masks the ?token= of mail links)
            log_event["query_params"] = _mask_dict(dict(request.query_params))
        request_body: Any = await _read_request_body(request)
        if request_body is not None:
            log_event["request_body"] = request_body

        try:
            response: Response = await call_next(request)
            log_event["status_code"] = response.status_code
            if response.status_code >= 400:
                response, log_event["error"] = await _capture_error(response)
        except Exception as exc:
            log_event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event["duration_ms"] = round((time.time() - start_time) * 1000, 2)
            self._ingest(log_event)

        return response
