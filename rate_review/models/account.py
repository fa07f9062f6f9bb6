"""역할별 계정 SQLAlchemy ORM 모델 정의.

Role-scoped account SQLAlchemy ORM model definitions.
Each role owns an independent table; the same email may appear in every
table because no cross-role uniqueness is enforced.

Tables:
    - users: 일반 사용자 계정 (Regular user accounts)
    - owners: 매장 소유자 계정 (Store owner accounts)
    - admins: 관리자 계정 (Administrator accounts)
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from rate_review.database import Base


class AccountRole(str, enum.Enum):
    """계정 역할 — 역할 이름과 테이블 이름을 연결.

    Account role. The value is the normalized role name; ``table`` is the
    role collection backing it.
    """

    USER = "user"
    OWNER = "owner"
    ADMIN = "admin"

    @property
    def table(self) -> str:
        return f"{self.value}s"

    @property
    def dashboard_path(self) -> str:
        """역할별 대시보드 경로 (Client-side dashboard entry point)."""
        return f"/pages/{self.value}dashboard"


class AccountMixin:
    """세 역할 테이블이 공유하는 계정 컬럼.

    Columns shared by the three role tables.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        email: 이메일 (Email, unique within its role table)
        name: 이름 (Display name, 20-60 chars)
        address: 주소 (Postal address, up to 400 chars)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    # 계정 고유 식별자 — Account unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 이메일 — 역할 테이블 안에서만 고유 (Unique within this role table only)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(60), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # 비밀번호 해시 — 평문 저장 금지 (never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))


class UserAccount(AccountMixin, Base):
    """일반 사용자 계정 — 매장에 평점을 남기는 계정."""

    __tablename__ = AccountRole.USER.table


class OwnerAccount(AccountMixin, Base):
    """매장 소유자 계정 — 자신의 매장과 받은 평점을 조회."""

    __tablename__ = AccountRole.OWNER.table


class AdminAccount(AccountMixin, Base):
    """관리자 계정 — 전체 계정/매장 관리."""

    __tablename__ = AccountRole.ADMIN.table


# 역할 → 모델 매핑 — Role to model lookup used by repositories
ACCOUNT_MODELS: dict[AccountRole, type[AccountMixin]] = {
    AccountRole.USER: UserAccount,
    AccountRole.OWNER: OwnerAccount,
    AccountRole.ADMIN: AdminAccount,
}
