"""매장 레포지토리 — 매장 CRUD 및 검색 쿼리.

Store Repository — CRUD and search queries for stores, plus the locked
read used by the rating aggregate update.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rate_review.models.store import Store
from rate_review.repositories.base import BaseRepository


class StoreRepository(BaseRepository[Store]):
    """매장 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Store)

    async def get_for_update(
        self,
        db: AsyncSession,
        store_id: UUID,
    ) -> Store | None:
        """매장 행을 잠그고 조회합니다 (SELECT ... FOR UPDATE).

        Retrieve a store and lock its row until the transaction ends, so
        concurrent aggregate updates on the same store serialize.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            store_id: 매장 ID (Store UUID)

        Returns:
            Store | None: 잠긴 매장 또는 None (Locked store or None)
        """
        query: Select = select(Store).where(Store.id == store_id).with_for_update()
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def search(
        self,
        db: AsyncSession,
        search: str | None = None,
        include_email: bool = False,
    ) -> Sequence[Store]:
        """매장 목록 검색 — 이름/주소(선택적으로 이메일) 부분 일치.

        List stores, optionally filtered by a case-insensitive substring of
        name and address, and of owner email when ``include_email`` is set.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            search: 검색어 (Search term, None lists everything)
            include_email: 이메일도 검색 대상에 포함 (Also match owner email)

        Returns:
            Sequence[Store]: 매장 목록 (Stores ordered by name)
        """
        query: Select = select(Store).order_by(Store.name)
        if search:
            pattern: str = f"%{search}%"
            conditions = [Store.name.ilike(pattern), Store.address.ilike(pattern)]
            if include_email:
                conditions.append(Store.email.ilike(pattern))
            query = query.where(or_(*conditions))
        result = await db.execute(query)
        return result.scalars().all()

    async def get_by_owner_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> Sequence[Store]:
        """소유자 이메일로 매장 목록을 조회합니다."""
        return await self.get_all(db, filters={"email": email}, order_by=Store.created_at)


# 싱글턴 인스턴스 — Singleton instance
store_repository: StoreRepository = StoreRepository()
