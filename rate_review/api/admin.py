"""관리자 라우터 — 대시보드 통계, 계정/매장 관리.

Admin Router — Platform statistics, account listing and creation, store
listing. Admin accounts only.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rate_review.api.deps import CurrentAccount, require_admin
from rate_review.database import get_db
from rate_review.schemas.admin import AccountCreate, AccountListItem, DashboardStatsResponse
from rate_review.schemas.store import StoreResponse
from rate_review.services.dashboard_service import dashboard_service
from rate_review.services.store_service import store_service

router: APIRouter = APIRouter()


@router.get("/dashboard/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
    current: Annotated[CurrentAccount, Depends(require_admin)],
) -> DashboardStatsResponse:
    """플랫폼 통계 — 전체 계정 수, 매장 수, 평점 수."""
    return await dashboard_service.get_stats(db)


@router.get("/accounts", response_model=list[AccountListItem])
async def list_accounts(
    db: Annotated[AsyncSession, Depends(get_db)],
    current: Annotated[CurrentAccount, Depends(require_admin)],
    search: str | None = None,
) -> list[AccountListItem]:
    """전체 계정 목록 — 이름/이메일/주소/역할 검색.

    List accounts of every role, tagged with their role.
    """
    return await dashboard_service.list_accounts(db, search)


@router.post("/accounts", response_model=AccountListItem, status_code=201)
async def create_account(
    data: AccountCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current: Annotated[CurrentAccount, Depends(require_admin)],
) -> AccountListItem:
    """계정 직접 생성 — 확인 메일 없이 바로 가입."""
    result: AccountListItem = await dashboard_service.create_account(db, data)
    await db.commit()
    return result


@router.get("/stores", response_model=list[StoreResponse])
async def list_stores(
    db: Annotated[AsyncSession, Depends(get_db)],
    current: Annotated[CurrentAccount, Depends(require_admin)],
    search: str | None = None,
) -> list[StoreResponse]:
    """전체 매장 목록 — 이름/이메일/주소 검색."""
    return await store_service.list_all_stores(db, search)
