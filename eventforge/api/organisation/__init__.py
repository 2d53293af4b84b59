"""조직 계정 API 라우터 패키지 — ORGANISATION 역할 전용 엔드포인트 통합.

Organisation API Router package — Endpoints restricted to accounts with
the ORGANISATION role.

Included routers:
    - profile: 조직 프로필 (Organisation profile)
    - events: 조직 이벤트 CRUD (Owned event CRUD)
    - images: 이미지 업로드/삭제 (Image upload/delete)
"""

from fastapi import APIRouter

from eventforge.api.organisation.profile import router as profile_router
from eventforge.api.organisation.events import router as events_router
from eventforge.api.organisation.images import router as images_router

organisation_router: APIRouter = APIRouter()

organisation_router.include_router(profile_router, prefix="/profile", tags=["Organisation Profile"])
organisation_router.include_router(events_router, prefix="/events", tags=["Organisation Events"])
organisation_router.include_router(images_router, prefix="/images", tags=["Organisation Images"])
