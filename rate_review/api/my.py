"""내 정보 라우터 — 사용자 본인이 남긴 평점."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rate_review.api.deps import CurrentAccount, require_user
from rate_review.database import get_db
from rate_review.schemas.store import RatingResponse
from rate_review.services.rating_service import rating_service

router: APIRouter = APIRouter()


@router.get("/ratings", response_model=list[RatingResponse])
async def list_my_ratings(
    db: Annotated[AsyncSession, Depends(get_db)],
    current: Annotated[CurrentAccount, Depends(require_user)],
) -> list[RatingResponse]:
    """내가 남긴 평점 목록을 조회합니다."""
    return await rating_service.list_my_ratings(db, current.account)
