"""매장 및 평점 Pydantic 요청/응답 스키마 정의.

Store and rating Pydantic request/response schema definitions.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class StoreCreate(BaseModel):
    """매장 생성 요청 스키마.

    Owners always create stores under their own email, so ``email`` is only
    read for admin requests.

    Attributes:
        name: 매장 이름 (Store name, 20-60 chars)
        address: 매장 주소 (Store address, up to 400 chars)
        email: 소유자 이메일 (Owner email, required for admins)
    """

    name: str
    address: str
    email: str | None = None


class StoreResponse(BaseModel):
    """매장 응답 스키마 — 평점 집계 포함.

    Attributes:
        id: 매장 UUID (Store identifier)
        name: 매장 이름 (Store name)
        address: 매장 주소 (Store address)
        email: 소유자 이메일 (Owner email)
        total_rating_count: 평점 개수 (Number of ratings)
        total_rating_sum: 평점 합계 (Sum of ratings)
        average_rating: 평균 평점 (Average rounded to 1 decimal, None without ratings)
        my_rating: 내 평점 (Caller's own rating, user accounts only)
        created_at: 생성 일시 (Creation timestamp)
    """

    id: str
    name: str
    address: str
    email: str
    total_rating_count: int
    total_rating_sum: int
    average_rating: float | None = None
    my_rating: int | None = None
    created_at: datetime | None = None


class RatingCreate(BaseModel):
    """평점 제출 요청 스키마 — 1~5 정수."""

    rating: int = Field(..., ge=1, le=5)


class RatingResponse(BaseModel):
    """평점 응답 스키마.

    Attributes:
        id: 평점 UUID (Rating identifier)
        store_id: 매장 UUID (Rated store)
        email: 평가자 이메일 (Rater email)
        username: 평가자 이름 (Rater display name)
        rating: 평점 (Rating value 1-5)
        created_at: 최초 평가 일시 (First rating timestamp)
        updated_at: 마지막 수정 일시 (Last change timestamp)
    """

    id: str
    store_id: str
    email: str
    username: str
    rating: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RatingSubmitResponse(BaseModel):
    """평점 제출 결과 — 저장된 평점과 갱신된 매장 집계."""

    rating: RatingResponse
    store: StoreResponse
