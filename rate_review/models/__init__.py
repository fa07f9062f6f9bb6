"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the metadata,
which is required for migrations and ``create_all`` in tests.

Modules:
    account: 역할별 계정 (Role-scoped accounts: users, owners, admins)
    store: 매장 및 평점 (Stores and ratings)
    pending_registration: 가입 대기 (Pending registrations awaiting confirmation)
    token: 리프레시 토큰 (Refresh tokens)
"""

from rate_review.models.account import (
    ACCOUNT_MODELS,
    AccountMixin,
    AccountRole,
    AdminAccount,
    OwnerAccount,
    UserAccount,
)
from rate_review.models.pending_registration import PendingRegistration
from rate_review.models.store import Rating, Store
from rate_review.models.token import RefreshToken

__all__ = [
    "ACCOUNT_MODELS", "AccountMixin", "AccountRole",
    "UserAccount", "OwnerAccount", "AdminAccount",
    "PendingRegistration",
    "Store", "Rating",
    "RefreshToken",
]
