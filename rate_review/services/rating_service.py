"""평점 서비스 — 평점 업서트와 매장 평점 집계 갱신.

Rating Service — Rating upserts and the store aggregate update.

Aggregate rule (per store):
    new_count = 평점 테이블 재집계 (recount of rating rows)
    new_sum   = 기존 합계 - 이전 평점(있다면) + 새 평점
                (stored sum - previous rating, if any, + new rating)

All steps run in the caller's transaction with the store row locked, so
two raters on the same store cannot interleave between recount and write.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from rate_review.models.account import AccountMixin
from rate_review.models.store import Rating, Store
from rate_review.repositories.rating_repository import rating_repository
from rate_review.repositories.store_repository import store_repository
from rate_review.schemas.store import RatingResponse, RatingSubmitResponse
from rate_review.services.store_service import rating_to_response, store_to_response
from rate_review.utils.exceptions import NotFoundError, ValidationFailedError

RATING_MIN: int = 1
RATING_MAX: int = 5


def username_for(email: str) -> str:
    """평가자 표시 이름 — 이메일의 로컬 파트 (Local part of the email)."""
    return email.split("@")[0]


class RatingService:
    """평점 관련 비즈니스 로직을 처리하는 서비스."""

    async def submit_rating(
        self,
        db: AsyncSession,
        store_id: UUID,
        email: str,
        username: str,
        rating: int,
    ) -> tuple[Rating, Store]:
        """평점을 저장하고 매장 집계를 갱신합니다.

        Upsert the rating keyed by (store_id, email) and rewrite the store's
        aggregate. Repeating an identical submission leaves the aggregate
        unchanged; changing a rating from v1 to v2 moves the sum by v2 - v1.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            store_id: 매장 ID (Store UUID)
            email: 평가자 이메일 (Rater email)
            username: 평가자 이름 (Rater display name)
            rating: 평점 1~5 (Rating value)

        Returns:
            tuple[Rating, Store]: 저장된 평점과 갱신된 매장 (Saved rating and updated store)

        Raises:
            ValidationFailedError: 평점 범위 밖 (Rating outside 1..5)
            NotFoundError: 매장 없음 (Store not found)
        """
        if rating < RATING_MIN or rating > RATING_MAX:
            raise ValidationFailedError({"rating": "Rating must be between 1 and 5"})

        # 매장 행 잠금 — Lock the store row for the rest of the transaction
        store: Store | None = await store_repository.get_for_update(db, store_id)
        if store is None:
            raise NotFoundError("Store not found")

        # 1. 업서트 — 이전 평점 값 보관 (Upsert, keeping the previous value)
        existing: Rating | None = await rating_repository.get_by_store_and_email(db, store_id, email)
        previous: int | None = None
        if existing is None:
            saved: Rating = await rating_repository.create(
                db,
                {
                    "store_id": store_id,
                    "email": email,
                    "username": username,
                    "rating": rating,
                },
            )
        else:
            previous = existing.rating
            existing.rating = rating
            existing.username = username
            await db.flush()
            await db.refresh(existing)
            saved = existing

        # 2. 재집계 — 증분이 아닌 실제 행 수 (Authoritative recount, not an increment)
        recount: int = await rating_repository.count_for_store(db, store_id)

        # 3. 합계 계산 — Sum replaces the previous value with the new one
        new_sum: int = (store.total_rating_sum or 0) - (previous or 0) + rating

        # 4. 집계 기록 — Write the aggregate back
        store.total_rating_count = recount
        store.total_rating_sum = new_sum
        await db.flush()
        await db.refresh(store)

        return saved, store

    async def rate_store(
        self,
        db: AsyncSession,
        store_id: UUID,
        account: AccountMixin,
        rating: int,
    ) -> RatingSubmitResponse:
        """현재 사용자 이름으로 평점을 제출합니다."""
        saved, store = await self.submit_rating(
            db, store_id, account.email, username_for(account.email), rating
        )
        return RatingSubmitResponse(
            rating=rating_to_response(saved),
            store=store_to_response(store, saved.rating),
        )

    async def list_my_ratings(
        self,
        db: AsyncSession,
        account: AccountMixin,
    ) -> list[RatingResponse]:
        """내가 남긴 평점 목록을 조회합니다."""
        ratings = await rating_repository.list_by_email(db, account.email)
        return [rating_to_response(r) for r in ratings]


# 싱글턴 인스턴스 — Singleton instance
rating_service: RatingService = RatingService()
