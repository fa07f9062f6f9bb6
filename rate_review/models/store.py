"""매장 및 평점 SQLAlchemy ORM 모델 정의.

Store and rating SQLAlchemy ORM model definitions.
Each store keeps a denormalized rating aggregate (count + sum) that is
rewritten whenever one of its ratings changes.

Tables:
    - stores: 매장 (Stores with rating aggregate)
    - user_ratings: 사용자 평점 (One rating per store and rater email)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rate_review.database import Base


class Store(Base):
    """매장 모델 — 평점 집계를 함께 보관.

    Store model with its rating aggregate.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 매장 이름 (Store name)
        address: 매장 주소 (Store address)
        email: 소유자 이메일 (Owner's email, links the store to an owner account)
        total_rating_count: 평점 개수 (Number of rating rows, recounted on each update)
        total_rating_sum: 평점 합계 (Sum of all rating values)
        created_at: 생성 일시 UTC (Creation timestamp)

    Relationships:
        ratings: 매장 평점 목록 (Ratings for this store, cascade delete)
    """

    __tablename__ = "stores"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(60), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # 소유자 이메일 — owners 테이블과 FK 없이 이메일로 연결 (Linked to owners by email, no FK)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    total_rating_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_rating_sum: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    ratings = relationship("Rating", back_populates="store", cascade="all, delete-orphan")

    @property
    def average_rating(self) -> float | None:
        """평균 평점 — 평점이 없으면 None (Undefined when there are no ratings)."""
        if not self.total_rating_count:
            return None
        return round(self.total_rating_sum / self.total_rating_count, 1)


class Rating(Base):
    """사용자 평점 모델 — (store_id, email) 당 하나.

    User rating model. A later rating from the same email for the same
    store replaces the earlier one.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        store_id: 대상 매장 FK (Rated store)
        email: 평가자 이메일 (Rater's email)
        username: 평가자 표시 이름 (Rater display name, email local part)
        rating: 평점 1~5 (Rating value)
        created_at: 최초 평가 일시 (First rating timestamp)
        updated_at: 마지막 수정 일시 (Last change timestamp)

    Constraints:
        uq_rating_store_email: 매장별 평가자 고유 (One rating per store per email)
        ck_rating_range: 평점 범위 1~5 (Rating must be within 1..5)
    """

    __tablename__ = "user_ratings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    store_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("store_id", "email", name="uq_rating_store_email"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_rating_range"),
    )

    store = relationship("Store", back_populates="ratings")
