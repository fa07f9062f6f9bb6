"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates the JSON endpoints into a single router
mounted under ``/api/v1``. The confirmation callback router lives beside
it and is mounted at the site root.

Included routers:
    - auth: 로그인, 가입, 토큰, 프로필 (Login, registration, tokens, profile)
    - stores: 매장 및 평점 (Stores and ratings)
    - my: 내 평점 (The caller's own ratings)
    - admin: 관리자 대시보드 (Admin dashboard)
"""

from fastapi import APIRouter

from rate_review.api.admin import router as admin_router
from rate_review.api.auth import router as auth_router
from rate_review.api.my import router as my_router
from rate_review.api.stores import router as stores_router

api_router: APIRouter = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Auth"])
api_router.include_router(stores_router, prefix="/stores", tags=["Stores"])
api_router.include_router(my_router, prefix="/my", tags=["My"])
api_router.include_router(admin_router, prefix="/admin", tags=["Admin"])
