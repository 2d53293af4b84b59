"""공개 API 라우터 패키지 — 인증 및 비로그인 조회 엔드포인트 통합.

Public API Router package — Aggregates authentication endpoints and the
read-only public listings into a single router.

Included routers:
    - auth: 회원가입, 인증, 로그인, 비밀번호 (Registration, verification, login, passwords)
    - events: 공개 이벤트 조회 (Public event listings)
    - organisations: 공개 조직 조회 (Public organisation listings)
    - images: 이미지 다운로드 (Image download)
"""

from fastapi import APIRouter

from eventforge.api.public.auth import router as auth_router
from eventforge.api.public.events import router as events_router
from eventforge.api.public.organisations import router as organisations_router
from eventforge.api.public.images import router as images_router

public_router: APIRouter = APIRouter()

public_router.include_router(auth_router, prefix="/auth", tags=["Auth"])
public_router.include_router(events_router, prefix="/events", tags=["Events"])
public_router.include_router(organisations_router, prefix="/organisations", tags=["Organisations"])
public_router.include_router(images_router, prefix="/images", tags=["Images"])
