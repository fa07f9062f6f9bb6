"""매장 서비스 — 매장 조회/생성 및 매장별 평점 조회.

Store Service — Store listing and creation, plus the per-store rating
listing shown on owner and admin dashboards.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from rate_review.models.account import AccountMixin, AccountRole
from rate_review.models.store import Rating, Store
from rate_review.repositories.rating_repository import rating_repository
from rate_review.repositories.store_repository import store_repository
from rate_review.schemas.store import RatingResponse, StoreCreate, StoreResponse
from rate_review.utils.exceptions import ForbiddenError, NotFoundError, ValidationFailedError
from rate_review.utils.validation import validate_form


def store_to_response(store: Store, my_rating: int | None = None) -> StoreResponse:
    """매장 모델을 응답 스키마로 변환합니다."""
    return StoreResponse(
        id=str(store.id),
        name=store.name,
        address=store.address,
        email=store.email,
        total_rating_count=store.total_rating_count,
        total_rating_sum=store.total_rating_sum,
        average_rating=store.average_rating,
        my_rating=my_rating,
        created_at=store.created_at,
    )


def rating_to_response(rating: Rating) -> RatingResponse:
    """평점 모델을 응답 스키마로 변환합니다."""
    return RatingResponse(
        id=str(rating.id),
        store_id=str(rating.store_id),
        email=rating.email,
        username=rating.username,
        rating=rating.rating,
        created_at=rating.created_at,
        updated_at=rating.updated_at,
    )


class StoreService:
    """매장 관련 비즈니스 로직을 처리하는 서비스."""

    async def list_stores(
        self,
        db: AsyncSession,
        account: AccountMixin,
        role: AccountRole,
        search: str | None = None,
    ) -> list[StoreResponse]:
        """매장 목록을 조회합니다. 사용자 계정에는 내 평점을 함께 표시.

        List stores matching ``search`` (name or address). For user
        accounts each store carries the caller's own rating.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            account: 현재 계정 (Current account)
            role: 현재 역할 (Current role)
            search: 검색어 (Search term)

        Returns:
            list[StoreResponse]: 매장 목록 (Store responses)
        """
        stores = await store_repository.search(db, search)

        my_ratings: dict[UUID, int] = {}
        if role == AccountRole.USER:
            ratings = await rating_repository.list_by_email(db, account.email)
            my_ratings = {r.store_id: r.rating for r in ratings}

        return [store_to_response(s, my_ratings.get(s.id)) for s in stores]

    async def list_all_stores(
        self,
        db: AsyncSession,
        search: str | None = None,
    ) -> list[StoreResponse]:
        """관리자용 매장 목록 — 이름/이메일/주소 검색."""
        stores = await store_repository.search(db, search, include_email=True)
        return [store_to_response(s) for s in stores]

    async def list_owner_stores(
        self,
        db: AsyncSession,
        owner: AccountMixin,
    ) -> list[StoreResponse]:
        """소유자 본인의 매장 목록을 조회합니다."""
        stores = await store_repository.get_by_owner_email(db, owner.email)
        return [store_to_response(s) for s in stores]

    async def create_store(
        self,
        db: AsyncSession,
        account: AccountMixin,
        role: AccountRole,
        data: StoreCreate,
    ) -> StoreResponse:
        """새 매장을 생성합니다. 평점 집계는 0에서 시작.

        Create a store with an empty rating aggregate. Owners always create
        stores under their own email; admins must name the owner's email.

        Raises:
            ValidationFailedError: 이름/이메일/주소 규칙 위반 (Field rules violated)
        """
        email: str = account.email if role == AccountRole.OWNER else (data.email or "")

        errors: dict[str, str] = validate_form({
            "name": data.name,
            "email": email,
            "address": data.address,
        })
        if errors:
            raise ValidationFailedError(errors)

        store: Store = await store_repository.create(
            db,
            {
                "name": data.name,
                "email": email,
                "address": data.address,
                "total_rating_count": 0,
                "total_rating_sum": 0,
            },
        )
        return store_to_response(store)

    async def list_store_ratings(
        self,
        db: AsyncSession,
        store_id: UUID,
        account: AccountMixin,
        role: AccountRole,
        search: str | None = None,
    ) -> list[RatingResponse]:
        """매장에 달린 평점 목록을 조회합니다.

        List the ratings of one store. Owners may only read their own
        stores; admins may read any store.

        Raises:
            NotFoundError: 매장 없음 (Store not found)
            ForbiddenError: 다른 소유자의 매장 (Store belongs to another owner)
        """
        store: Store | None = await store_repository.get_by_id(db, store_id)
        if store is None:
            raise NotFoundError("Store not found")

        if role == AccountRole.OWNER and store.email != account.email:
            raise ForbiddenError("No access to this store")

        ratings = await rating_repository.list_for_store(db, store_id, search)
        return [rating_to_response(r) for r in ratings]


# 싱글턴 인스턴스 — Singleton instance
store_service: StoreService = StoreService()
