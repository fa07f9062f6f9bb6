"""가입 대기 레포지토리 — 확인 토큰 기반 조회 및 정리.

Pending Registration Repository — Token lookups and cleanup for
registrations awaiting email confirmation.
"""

from datetime import datetime

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from rate_review.models.pending_registration import PendingRegistration
from rate_review.repositories.base import BaseRepository


class PendingRegistrationRepository(BaseRepository[PendingRegistration]):
    """가입 대기 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(PendingRegistration)

    async def get_by_token(
        self,
        db: AsyncSession,
        token: str,
    ) -> PendingRegistration | None:
        """확인 토큰으로 가입 대기 레코드를 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            token: 확인 링크의 토큰 (Token from the confirmation link)

        Returns:
            PendingRegistration | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = select(PendingRegistration).where(PendingRegistration.token == token)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def delete_for_email(
        self,
        db: AsyncSession,
        role: str,
        email: str,
    ) -> None:
        """같은 역할/이메일의 이전 가입 대기 레코드를 삭제합니다.

        Drop earlier pending registrations for the same role and email so
        only the most recent confirmation link stays valid.
        """
        stmt = delete(PendingRegistration).where(
            PendingRegistration.role == role,
            PendingRegistration.email == email,
        )
        await db.execute(stmt)
        await db.flush()

    async def delete_expired(
        self,
        db: AsyncSession,
        now: datetime,
    ) -> None:
        """만료된 가입 대기 레코드를 일괄 삭제합니다."""
        stmt = delete(PendingRegistration).where(PendingRegistration.expires_at < now)
        await db.execute(stmt)
        await db.flush()


# 싱글턴 인스턴스 — Singleton instance
pending_registration_repository: PendingRegistrationRepository = PendingRegistrationRepository()
