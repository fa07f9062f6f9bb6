"""FastAPI 의존성 주입 모듈 — 인증 및 역할 검사.

FastAPI dependency injection module — Authentication and role checks.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. decode_token()이 JWT를 검증하고 페이로드를 반환
       (decode_token verifies the JWT and returns its payload)
    3. 페이로드의 "role"로 역할 테이블을 고르고 "sub"로 계정을 조회
       (The "role" claim picks the role table, "sub" identifies the row)

Authorization Flow (require_role):
    현재 계정의 역할이 허용 목록에 없으면 403 Forbidden
    (403 when the current account's role is not in the allowed set)
"""

from dataclasses import dataclass
from typing import Annotated, Awaitable, Callable
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from rate_review.database import get_db
from rate_review.models.account import AccountMixin, AccountRole
from rate_review.repositories.account_repository import account_repository
from rate_review.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기 — Extracts the JWT from Authorization: Bearer <token>
security: HTTPBearer = HTTPBearer()


@dataclass
class CurrentAccount:
    """인증된 계정과 그 역할.

    Attributes:
        account: 역할 테이블의 계정 행 (Row from the role's table)
        role: 토큰의 역할 (Role the account logged in under)
    """

    account: AccountMixin
    role: AccountRole


async def get_current_account(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CurrentAccount:
    """JWT 토큰에서 현재 인증된 계정을 추출합니다.

    Decode the bearer token and load the account from the table of the
    role it was issued for.

    Raises:
        HTTPException(401): 토큰이 유효하지 않거나 만료됨 (Invalid or expired token)
        HTTPException(401): 계정을 찾을 수 없음 (Account no longer exists)
    """
    try:
        payload: dict = decode_token(credentials.credentials)
        # 토큰 타입 검증 — Reject refresh tokens used as access tokens
        if payload.get("type") != "access":
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token type")
        account_id: UUID = UUID(payload["sub"])
        role: AccountRole = AccountRole(payload["role"])
    except HTTPException:
        raise
    except (jwt.ExpiredSignatureError, jwt.InvalidTokenError, KeyError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    account: AccountMixin | None = await account_repository.get_by_id(db, role, account_id)
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account not found")

    return CurrentAccount(account=account, role=role)


def require_role(*roles: AccountRole) -> Callable[..., Awaitable[CurrentAccount]]:
    """역할 기반 권한 검사 의존성 팩토리.

    Dependency factory allowing only accounts logged in under one of
    ``roles``.
    """
    async def _check(
        current: Annotated[CurrentAccount, Depends(get_current_account)],
    ) -> CurrentAccount:
        if current.role not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return current
    return _check


# 편의 의존성 — Pre-configured role dependencies
require_user = require_role(AccountRole.USER)
require_owner = require_role(AccountRole.OWNER)
require_admin = require_role(AccountRole.ADMIN)
require_owner_or_admin = require_role(AccountRole.OWNER, AccountRole.ADMIN)
