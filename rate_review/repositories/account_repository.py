"""계정 레포지토리 — 역할별 계정 테이블 조회 및 생성.

Account Repository — Lookups and inserts against the per-role account
tables (users, owners, admins). Every query is scoped to exactly one role
table; a missing row is returned as None, never raised.
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rate_review.models.account import ACCOUNT_MODELS, AccountMixin, AccountRole
from rate_review.repositories.base import BaseRepository
from rate_review.utils.password import verify_password


class AccountRepository:
    """역할별 계정 테이블에 대한 쿼리를 담당하는 레포지토리.

    Repository dispatching each query to the table of the requested role.
    """

    def __init__(self) -> None:
        # 역할별 CRUD 레포지토리 — One generic repository per role table
        self._repos: dict[AccountRole, BaseRepository] = {
            role: BaseRepository(model) for role, model in ACCOUNT_MODELS.items()
        }

    def model_for(self, role: AccountRole) -> type[AccountMixin]:
        return ACCOUNT_MODELS[role]

    async def get_by_id(
        self,
        db: AsyncSession,
        role: AccountRole,
        account_id: UUID,
    ) -> AccountMixin | None:
        return await self._repos[role].get_by_id(db, account_id)

    async def get_by_email(
        self,
        db: AsyncSession,
        role: AccountRole,
        email: str,
    ) -> AccountMixin | None:
        """이메일로 역할 테이블의 계정을 조회합니다.

        Retrieve the account with this email from the role's table.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            role: 조회할 역할 (Role whose table is queried)
            email: 이메일, 저장된 그대로 비교 (Email, compared as stored)

        Returns:
            AccountMixin | None: 조회된 계정 또는 None (Found account or None)
        """
        model = self.model_for(role)
        query: Select = select(model).where(model.email == email)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_credentials(
        self,
        db: AsyncSession,
        role: AccountRole,
        email: str,
        password: str,
    ) -> AccountMixin | None:
        """이메일과 비밀번호가 모두 일치하는 계정을 조회합니다.

        Retrieve the account matching both email and password. The password
        is checked against the stored bcrypt hash, so the comparison is
        case-sensitive.

        Returns:
            AccountMixin | None: 일치하는 계정 또는 None (Matching account or None)
        """
        account: AccountMixin | None = await self.get_by_email(db, role, email)
        if account is None or not verify_password(password, account.password_hash):
            return None
        return account

    async def create(
        self,
        db: AsyncSession,
        role: AccountRole,
        obj_data: dict[str, Any],
    ) -> AccountMixin:
        return await self._repos[role].create(db, obj_data)

    async def update_password_hash(
        self,
        db: AsyncSession,
        role: AccountRole,
        account_id: UUID,
        password_hash: str,
    ) -> AccountMixin | None:
        return await self._repos[role].update(db, account_id, {"password_hash": password_hash})

    async def count(self, db: AsyncSession, role: AccountRole) -> int:
        return await self._repos[role].count(db)

    async def search(
        self,
        db: AsyncSession,
        role: AccountRole,
        search: str | None = None,
    ) -> Sequence[AccountMixin]:
        """역할 테이블에서 이름/이메일/주소 부분 일치 검색.

        List accounts of one role, optionally filtered by a case-insensitive
        substring of name, email or address.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            role: 조회할 역할 (Role whose table is queried)
            search: 검색어, None이면 전체 (Search term; None lists everything)

        Returns:
            Sequence[AccountMixin]: 계정 목록 (Accounts ordered by creation time)
        """
        model = self.model_for(role)
        query: Select = select(model).order_by(model.created_at)
        if search:
            pattern: str = f"%{search}%"
            query = query.where(
                or_(
                    model.name.ilike(pattern),
                    model.email.ilike(pattern),
                    model.address.ilike(pattern),
                )
            )
        result = await db.execute(query)
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instance
account_repository: AccountRepository = AccountRepository()
