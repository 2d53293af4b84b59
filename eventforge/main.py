"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어 및 라우터 등록.

FastAPI application entry point — Middleware and router registration.
Configures logging, CORS, exception handlers, health check, and includes
the public, organisation and admin routers under /api/v1.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eventforge.api.exception_handlers import setup_exception_handlers
from eventforge.config import settings
from eventforge.logging_config import setup_logging
from eventforge.middleware.axiom_logging import AxiomLoggingMiddleware

setup_logging()

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom API 로깅 미들웨어 — Axiom API request/response logging
# CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어 — Cross-Origin Resource Sharing middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# 라우터 등록 — Router registration
# ---------------------------------------------------------------------------
# public_router: 인증 + 공개 조회 (Auth and public listings)
# organisation_router: ORGANISATION 역할 전용 (Organisation accounts)
# admin_router: ADMIN 역할 전용 (Administrators)
from eventforge.api.public import public_router  # noqa: E402
from eventforge.api.organisation import organisation_router  # noqa: E402
from eventforge.api.admin import admin_router  # noqa: E402

app.include_router(public_router, prefix="/api/v1")
app.include_router(organisation_router, prefix="/api/v1/organisation")
app.include_router(admin_router, prefix="/api/v1/admin")
