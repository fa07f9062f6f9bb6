"""평점 레포지토리 — (store_id, email) 키 기반 조회와 집계.

Rating Repository — Lookups keyed by (store_id, email), per-store
recounts and per-rater listings.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rate_review.models.store import Rating
from rate_review.repositories.base import BaseRepository


class RatingRepository(BaseRepository[Rating]):
    """평점 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Rating)

    async def get_by_store_and_email(
        self,
        db: AsyncSession,
        store_id: UUID,
        email: str,
    ) -> Rating | None:
        """매장과 평가자 이메일로 평점을 조회합니다.

        Retrieve the rating a given email left on a given store.

        Returns:
            Rating | None: 조회된 평점 또는 None (Found rating or None)
        """
        query: Select = select(Rating).where(
            Rating.store_id == store_id,
            Rating.email == email,
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def count_for_store(
        self,
        db: AsyncSession,
        store_id: UUID,
    ) -> int:
        """매장의 평점 행 수를 다시 셉니다 (Authoritative recount)."""
        return await self.count(db, {"store_id": store_id})

    async def list_for_store(
        self,
        db: AsyncSession,
        store_id: UUID,
        search: str | None = None,
    ) -> Sequence[Rating]:
        """매장의 평점 목록 — 평가자 이름/이메일 부분 일치 검색.

        List a store's ratings, newest change first, optionally filtered by a
        case-insensitive substring of username or email.
        """
        query: Select = (
            select(Rating)
            .where(Rating.store_id == store_id)
            .order_by(Rating.updated_at.desc())
        )
        if search:
            pattern: str = f"%{search}%"
            query = query.where(or_(Rating.username.ilike(pattern), Rating.email.ilike(pattern)))
        result = await db.execute(query)
        return result.scalars().all()

    async def list_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> Sequence[Rating]:
        """평가자 이메일로 평점 목록을 조회합니다."""
        return await self.get_all(db, filters={"email": email}, order_by=Rating.created_at)


# 싱글턴 인스턴스 — Singleton instance
rating_repository: RatingRepository = RatingRepository()
