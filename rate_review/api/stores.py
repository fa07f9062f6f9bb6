"""매장 라우터 — 매장 조회/생성, 매장별 평점 조회 및 평점 제출.

Store Router — Store listing and creation, per-store ratings and rating
submission.

Permission Matrix (역할별 권한 설계):
    - 매장 목록: 모든 역할 (user는 내 평점 포함)
    - 매장 등록: Owner(본인 이메일), Admin(소유자 이메일 지정)
    - 내 매장: Owner
    - 매장 평점 목록: 해당 매장 Owner, Admin
    - 평점 제출: User
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rate_review.api.deps import (
    CurrentAccount,
    get_current_account,
    require_owner,
    require_owner_or_admin,
    require_user,
)
from rate_review.database import get_db
from rate_review.schemas.store import (
    RatingCreate,
    RatingResponse,
    RatingSubmitResponse,
    StoreCreate,
    StoreResponse,
)
from rate_review.services.rating_service import rating_service
from rate_review.services.store_service import store_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[StoreResponse])
async def list_stores(
    db: Annotated[AsyncSession, Depends(get_db)],
    current: Annotated[CurrentAccount, Depends(get_current_account)],
    search: str | None = None,
) -> list[StoreResponse]:
    """매장 목록을 조회합니다. 이름/주소 검색.

    List stores, optionally filtered by name or address.
    """
    return await store_service.list_stores(db, current.account, current.role, search)


@router.post("", response_model=StoreResponse, status_code=201)
async def create_store(
    data: StoreCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current: Annotated[CurrentAccount, Depends(require_owner_or_admin)],
) -> StoreResponse:
    """새 매장을 생성합니다. Owner/Admin만 가능."""
    result: StoreResponse = await store_service.create_store(db, current.account, current.role, data)
    await db.commit()
    return result


@router.get("/mine", response_model=list[StoreResponse])
async def list_my_stores(
    db: Annotated[AsyncSession, Depends(get_db)],
    current: Annotated[CurrentAccount, Depends(require_owner)],
) -> list[StoreResponse]:
    """소유자 본인의 매장 목록."""
    return await store_service.list_owner_stores(db, current.account)


@router.get("/{store_id}/ratings", response_model=list[RatingResponse])
async def list_store_ratings(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current: Annotated[CurrentAccount, Depends(require_owner_or_admin)],
    search: str | None = None,
) -> list[RatingResponse]:
    """매장에 달린 평점 목록. 매장 소유자와 Admin만 가능.

    List who rated the store, searchable by username or email.
    """
    return await store_service.list_store_ratings(
        db, store_id, current.account, current.role, search
    )


@router.post("/{store_id}/ratings", response_model=RatingSubmitResponse)
async def submit_rating(
    store_id: UUID,
    data: RatingCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current: Annotated[CurrentAccount, Depends(require_user)],
) -> RatingSubmitResponse:
    """평점 제출 — 같은 매장에 다시 제출하면 기존 평점을 교체.

    Submit or change the caller's rating of a store and return the
    refreshed store aggregate.
    """
    result: RatingSubmitResponse = await rating_service.rate_store(
        db, store_id, current.account, data.rating
    )
    await db.commit()
    return result
