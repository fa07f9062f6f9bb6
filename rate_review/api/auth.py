"""인증 라우터 — 로그인, 가입, 토큰 갱신, 프로필.

Auth Router — Role-scoped login, deferred registration, registration
status, token refresh/logout, profile and password change.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from rate_review.api.deps import CurrentAccount, get_current_account
from rate_review.database import get_db
from rate_review.schemas.auth import (
    AccountMeResponse,
    LoginRequest,
    PasswordChangeRequest,
    RefreshRequest,
    RegisterRequest,
    RegistrationPendingResponse,
    RegistrationStatusResponse,
    TokenResponse,
)
from rate_review.services.auth_service import auth_service
from rate_review.services.registration_service import registration_service

# 가입 결과 1회성 쿠키 — One-shot registration outcome cookies
REGISTRATION_SUCCESS_COOKIE: str = "registration_success"
REGISTRATION_ERROR_COOKIE: str = "registration_error"

router: APIRouter = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """역할별 로그인 — 성공 시 토큰과 대시보드 경로 반환.

    Log in against the selected role's table. Wrong password → 401
    "Invalid password"; no account under the role → 404 "Please register".
    """
    result: TokenResponse = await auth_service.login(db, data)
    await db.commit()
    return result


@router.post("/register", response_model=RegistrationPendingResponse, status_code=201)
async def register(
    data: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RegistrationPendingResponse:
    """가입 시작 — 확인 링크 메일 발송.

    Begin a registration. The account is created once the emailed
    confirmation link is followed.
    """
    result: RegistrationPendingResponse = await registration_service.begin_registration(db, data)
    await db.commit()
    return result


@router.get("/registration-status", response_model=RegistrationStatusResponse)
async def registration_status(
    request: Request,
    response: Response,
) -> RegistrationStatusResponse:
    """가입 확인 결과 조회 — 읽으면 쿠키 삭제.

    Report the outcome of the last confirmation redirect and clear it, so
    the flag is observed at most once.
    """
    result = RegistrationStatusResponse(
        success=request.cookies.get(REGISTRATION_SUCCESS_COOKIE) == "true",
        error=request.cookies.get(REGISTRATION_ERROR_COOKIE) or None,
    )
    response.delete_cookie(REGISTRATION_SUCCESS_COOKIE)
    response.delete_cookie(REGISTRATION_ERROR_COOKIE)
    return result


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    data: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """토큰 갱신 — 리프레시 토큰으로 새 토큰 쌍 발급."""
    result: TokenResponse = await auth_service.refresh_tokens(db, data)
    await db.commit()
    return result


@router.post("/logout", status_code=204)
async def logout(
    data: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """로그아웃 — 리프레시 토큰 폐기."""
    await auth_service.logout(db, data.refresh_token)
    await db.commit()


@router.get("/me", response_model=AccountMeResponse)
async def get_me(
    current: Annotated[CurrentAccount, Depends(get_current_account)],
) -> AccountMeResponse:
    """현재 계정 프로필 조회."""
    return auth_service.get_me(current.account, current.role)


@router.put("/password", status_code=204)
async def change_password(
    data: PasswordChangeRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current: Annotated[CurrentAccount, Depends(get_current_account)],
) -> None:
    """비밀번호 변경 — 새 비밀번호와 확인 값이 같아야 함."""
    await auth_service.change_password(db, current.account, current.role, data)
    await db.commit()
