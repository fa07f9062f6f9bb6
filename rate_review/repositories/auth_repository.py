"""인증 레포지토리 — 리프레시 토큰 CRUD.

Auth Repository — Refresh token lifecycle management.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from rate_review.models.token import RefreshToken


class AuthRepository:
    """리프레시 토큰 관련 데이터베이스 쿼리를 담당하는 레포지토리."""

    async def create_refresh_token(
        self,
        db: AsyncSession,
        account_id: UUID,
        role: str,
        token: str,
        expires_at: datetime,
    ) -> RefreshToken:
        """새 리프레시 토큰을 생성합니다.

        Create a new refresh token record in the database.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            account_id: 토큰 소유 계정 ID (Token owner account UUID)
            role: 토큰 소유 계정 역할 (Token owner role name)
            token: JWT 리프레시 토큰 문자열 (JWT refresh token string)
            expires_at: 토큰 만료 일시 (Token expiration timestamp)

        Returns:
            RefreshToken: 생성된 리프레시 토큰 레코드 (Created refresh token record)
        """
        db_token: RefreshToken = RefreshToken(
            account_id=account_id,
            role=role,
            token=token,
            expires_at=expires_at,
        )
        db.add(db_token)
        await db.flush()
        await db.refresh(db_token)
        return db_token

    async def get_refresh_token(
        self,
        db: AsyncSession,
        token: str,
    ) -> RefreshToken | None:
        query: Select = select(RefreshToken).where(RefreshToken.token == token)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def delete_refresh_token(
        self,
        db: AsyncSession,
        token: str,
    ) -> bool:
        """리프레시 토큰을 삭제합니다.

        Returns:
            bool: 삭제 성공 여부 (Whether the deletion was successful)
        """
        db_token: RefreshToken | None = await self.get_refresh_token(db, token)
        if db_token is None:
            return False

        await db.delete(db_token)
        await db.flush()
        return True

    async def delete_account_refresh_tokens(
        self,
        db: AsyncSession,
        account_id: UUID,
        role: str,
    ) -> None:
        """특정 계정의 모든 리프레시 토큰을 삭제합니다.

        Delete all refresh tokens of one account (logout from all devices).
        """
        stmt = delete(RefreshToken).where(
            RefreshToken.account_id == account_id,
            RefreshToken.role == role,
        )
        await db.execute(stmt)
        await db.flush()


# 싱글턴 인스턴스 — Singleton instance
auth_repository: AuthRepository = AuthRepository()
