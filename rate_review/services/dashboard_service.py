"""관리자 대시보드 서비스 — 통계, 전체 계정 조회, 계정 직접 생성.

Admin Dashboard Service — Platform statistics, cross-role account
listing and direct account creation.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from rate_review.models.account import AccountMixin, AccountRole
from rate_review.repositories.account_repository import account_repository
from rate_review.repositories.rating_repository import rating_repository
from rate_review.repositories.store_repository import store_repository
from rate_review.schemas.admin import AccountCreate, AccountListItem, DashboardStatsResponse
from rate_review.services.auth_service import resolve_role
from rate_review.utils.exceptions import DuplicateError, ValidationFailedError
from rate_review.utils.password import hash_password
from rate_review.utils.validation import validate_form


def account_to_item(account: AccountMixin, role: AccountRole) -> AccountListItem:
    return AccountListItem(
        id=str(account.id),
        email=account.email,
        name=account.name,
        address=account.address,
        role=role.value,
        created_at=account.created_at,
    )


class DashboardService:
    """관리자 대시보드 비즈니스 로직을 처리하는 서비스."""

    async def get_stats(self, db: AsyncSession) -> DashboardStatsResponse:
        """플랫폼 통계 — 세 역할 테이블 계정 합계, 매장 수, 평점 수."""
        total_users: int = 0
        for role in AccountRole:
            total_users += await account_repository.count(db, role)

        return DashboardStatsResponse(
            total_users=total_users,
            total_stores=await store_repository.count(db),
            total_ratings=await rating_repository.count(db),
        )

    async def list_accounts(
        self,
        db: AsyncSession,
        search: str | None = None,
    ) -> list[AccountListItem]:
        """모든 역할의 계정을 역할 표시와 함께 조회합니다.

        List accounts from every role table tagged with their role. The
        search term matches name, email and address case-insensitively; a
        term contained in a role name lists that role's accounts too.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            search: 검색어 (Search term, None lists everything)

        Returns:
            list[AccountListItem]: 계정 목록 (users, owners, admins 순)
        """
        items: list[AccountListItem] = []
        term: str | None = search.strip() if search else None
        for role in AccountRole:
            role_matches: bool = bool(term) and term.lower() in role.value
            accounts = await account_repository.search(db, role, None if role_matches else term)
            items.extend(account_to_item(a, role) for a in accounts)
        return items

    async def create_account(
        self,
        db: AsyncSession,
        data: AccountCreate,
    ) -> AccountListItem:
        """확인 메일 없이 계정을 바로 생성합니다.

        Create an account directly in the requested role table.

        Raises:
            BadRequestError: 알 수 없는 역할 (Unknown role)
            ValidationFailedError: 형식 규칙 위반 (Field rules violated)
            DuplicateError: 해당 역할에 이미 있는 이메일 (Email taken within the role)
        """
        role: AccountRole = resolve_role(data.role)

        errors: dict[str, str] = validate_form({
            "name": data.name,
            "email": data.email,
            "password": data.password,
            "address": data.address,
        })
        if errors:
            raise ValidationFailedError(errors)

        if await account_repository.get_by_email(db, role, data.email) is not None:
            raise DuplicateError("Email already registered for this role")

        account: AccountMixin = await account_repository.create(
            db,
            role,
            {
                "email": data.email,
                "name": data.name,
                "address": data.address,
                "password_hash": hash_password(data.password),
            },
        )
        return account_to_item(account, role)


# 싱글턴 인스턴스 — Singleton instance
dashboard_service: DashboardService = DashboardService()
