"""인증 서비스 — 역할별 로그인 판정, 토큰 발급/갱신, 프로필.

Auth Service — Role-scoped credential resolution, JWT token lifecycle,
current account profile and password change.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from rate_review.config import settings
from rate_review.models.account import AccountMixin, AccountRole
from rate_review.repositories.account_repository import account_repository
from rate_review.repositories.auth_repository import auth_repository
from rate_review.schemas.auth import (
    AccountMeResponse,
    LoginRequest,
    PasswordChangeRequest,
    RefreshRequest,
    TokenResponse,
)
from rate_review.utils.exceptions import (
    BadRequestError,
    InvalidPasswordError,
    NotFoundError,
    NotRegisteredError,
    UnauthorizedError,
    ValidationFailedError,
)
from rate_review.utils.jwt import create_access_token, create_refresh_token, decode_token
from rate_review.utils.password import hash_password
from rate_review.utils.timestamps import as_utc, utc_now
from rate_review.utils.validation import validate_password


@dataclass
class ResolvedLogin:
    """로그인 판정 성공 결과 — 계정 행과 정규화된 역할."""

    account: AccountMixin
    role: AccountRole


def resolve_role(role: str) -> AccountRole:
    """역할 이름을 정규화합니다 ("User" -> AccountRole.USER).

    Raises:
        BadRequestError: 알 수 없는 역할일 때 (Unknown role name)
    """
    try:
        return AccountRole(role.strip().lower())
    except ValueError:
        raise BadRequestError("Invalid role selected")


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling authentication business logic.
    """

    async def resolve_login(
        self,
        db: AsyncSession,
        email: str,
        password: str,
        role: str,
    ) -> ResolvedLogin:
        """이메일/비밀번호/역할 조합의 유효성을 판정합니다.

        Decide whether (email, password, role) names a valid account.
        The role's table is queried twice: first for a row matching both
        email and password, then for the email alone. A missing row from
        either lookup is an ordinary outcome, so an account deleted between
        the two lookups resolves to "not registered".

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 이메일 (Email as stored)
            password: 평문 비밀번호 (Plain text password, case-sensitive)
            role: 역할 이름 (Role name, case-insensitive)

        Returns:
            ResolvedLogin: 계정과 정규화된 역할 (Account row and normalized role)

        Raises:
            BadRequestError: 알 수 없는 역할 (Unknown role)
            InvalidPasswordError: 계정은 있지만 비밀번호 불일치 (Password mismatch)
            NotRegisteredError: 해당 역할에 계정 없음 (No account under this role)
        """
        account_role: AccountRole = resolve_role(role)

        account: AccountMixin | None = await account_repository.get_by_credentials(
            db, account_role, email, password
        )
        if account is not None:
            return ResolvedLogin(account=account, role=account_role)

        # 이메일만으로 재조회 — 비밀번호 불일치와 미가입을 구분
        # Look up by email alone to tell a wrong password from a missing account
        existing: AccountMixin | None = await account_repository.get_by_email(
            db, account_role, email
        )
        if existing is not None:
            raise InvalidPasswordError()
        raise NotRegisteredError()

    def _build_jwt_payload(self, account: AccountMixin, role: AccountRole) -> dict[str, str]:
        return {
            "sub": str(account.id),
            "email": account.email,
            "role": role.value,
        }

    async def _generate_tokens(
        self,
        db: AsyncSession,
        account: AccountMixin,
        role: AccountRole,
    ) -> TokenResponse:
        """액세스 토큰과 리프레시 토큰을 생성합니다.

        Generate an access/refresh token pair and persist the refresh token.
        Earlier refresh tokens of the account are revoked.
        """
        payload: dict[str, str] = self._build_jwt_payload(account, role)
        access_token: str = create_access_token(payload)
        refresh_token: str = create_refresh_token(payload)

        # 기존 리프레시 토큰 정리 — Clean up old refresh tokens to prevent accumulation
        await auth_repository.delete_account_refresh_tokens(db, account.id, role.value)

        expires_at: datetime = utc_now() + timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS)
        await auth_repository.create_refresh_token(
            db,
            account_id=account.id,
            role=role.value,
            token=refresh_token,
            expires_at=expires_at,
        )

        return TokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            role=role.value,
            redirect_to=role.dashboard_path,
        )

    async def login(
        self,
        db: AsyncSession,
        data: LoginRequest,
    ) -> TokenResponse:
        """로그인 — 자격 증명 판정 후 토큰 발급.

        Resolve the credentials and issue a token pair on success.
        """
        resolved: ResolvedLogin = await self.resolve_login(
            db, data.email, data.password, data.role
        )
        return await self._generate_tokens(db, resolved.account, resolved.role)

    async def refresh_tokens(
        self,
        db: AsyncSession,
        data: RefreshRequest,
    ) -> TokenResponse:
        """리프레시 토큰으로 새 토큰 쌍을 발급합니다.

        Raises:
            UnauthorizedError: 유효하지 않거나 만료된 리프레시 토큰일 때
                               (Invalid or expired refresh token)
        """
        db_token = await auth_repository.get_refresh_token(db, data.refresh_token)
        if db_token is None:
            raise UnauthorizedError("Invalid refresh token")

        if as_utc(db_token.expires_at) < utc_now():
            await auth_repository.delete_refresh_token(db, data.refresh_token)
            raise UnauthorizedError("Refresh token has expired")

        try:
            payload: dict = decode_token(data.refresh_token)
        except jwt.InvalidTokenError:
            await auth_repository.delete_refresh_token(db, data.refresh_token)
            raise UnauthorizedError("Invalid refresh token")

        if payload.get("type") != "refresh":
            raise UnauthorizedError("Invalid token type")

        role: AccountRole = AccountRole(db_token.role)
        account: AccountMixin | None = await account_repository.get_by_id(
            db, role, db_token.account_id
        )
        if account is None:
            raise UnauthorizedError("Account not found")

        await auth_repository.delete_refresh_token(db, data.refresh_token)
        return await self._generate_tokens(db, account, role)

    async def logout(
        self,
        db: AsyncSession,
        refresh_token: str,
    ) -> None:
        """로그아웃 처리 — 리프레시 토큰을 삭제합니다."""
        await auth_repository.delete_refresh_token(db, refresh_token)

    def get_me(self, account: AccountMixin, role: AccountRole) -> AccountMeResponse:
        """현재 로그인한 계정 프로필을 반환합니다."""
        return AccountMeResponse(
            id=str(account.id),
            email=account.email,
            name=account.name,
            address=account.address,
            role=role.value,
            created_at=account.created_at,
        )

    async def change_password(
        self,
        db: AsyncSession,
        account: AccountMixin,
        role: AccountRole,
        data: PasswordChangeRequest,
    ) -> None:
        """비밀번호를 변경합니다.

        Replace the account's password hash and revoke every refresh token
        issued to the account, so other sessions must log in again.

        Raises:
            BadRequestError: 새 비밀번호와 확인 값이 다를 때 (Passwords do not match)
            ValidationFailedError: 비밀번호 규칙 위반 (Password rule violated)
            NotFoundError: 계정이 사라졌을 때 (Account no longer exists)
        """
        if data.new_password != data.confirm_password:
            raise BadRequestError("Passwords do not match")

        error: str = validate_password(data.new_password)
        if error:
            raise ValidationFailedError({"password": error})

        updated = await account_repository.update_password_hash(
            db, role, account.id, hash_password(data.new_password)
        )
        if updated is None:
            raise NotFoundError("Account not found")

        # 기존 세션 무효화 — Revoke refresh tokens issued under the old password
        await auth_repository.delete_account_refresh_tokens(db, account.id, role.value)


# 싱글턴 인스턴스 — Singleton instance
auth_service: AuthService = AuthService()
