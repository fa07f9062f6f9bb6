"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers role-scoped login, deferred registration, token refresh and the
current account profile.

Field format rules (name/address/password/email) are enforced by the
services, not here, so a malformed form is reported as a single 422 with
one message per field.
"""

from datetime import datetime

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """역할별 로그인 요청 스키마.

    Attributes:
        email: 이메일 (Account email, matched as stored)
        password: 비밀번호 (Plain text password, verified against bcrypt hash)
        role: 역할 (Role name, case-insensitive: user / owner / admin)
    """

    email: str
    password: str
    role: str


class RegisterRequest(BaseModel):
    """가입 요청 스키마 — 확인 메일 발송 단계.

    Registration request schema. Submitting it sends a confirmation link;
    the account row is created only after the link is followed.

    Attributes:
        email: 이메일 (Email to register)
        password: 비밀번호 (Plain text, stored as bcrypt hash)
        role: 역할 (user / owner / admin)
        name: 이름 (Display name, 20-60 chars)
        address: 주소 (Address, up to 400 chars)
    """

    email: str
    password: str
    role: str
    name: str
    address: str


class RegistrationPendingResponse(BaseModel):
    """가입 대기 응답 — 확인 메일 발송 완료."""

    status: str = "pending"
    message: str = "Please check your email for the magic link to complete registration."


class RegistrationStatusResponse(BaseModel):
    """가입 완료 여부 응답 — 쿠키 기반 1회성 플래그.

    One-shot registration outcome read back by the client after the
    confirmation redirect. Reading it clears the underlying cookies.

    Attributes:
        success: 가입 완료 여부 (Whether the last confirmation succeeded)
        error: 마지막 가입 오류 메시지 (Last confirmation error, if any)
    """

    success: bool = False
    error: str | None = None


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    Attributes:
        access_token: JWT 액세스 토큰 (Short-lived access token)
        refresh_token: JWT 리프레시 토큰 (Long-lived refresh token)
        token_type: 토큰 유형 (Always "bearer")
        role: 로그인한 역할 (Normalized role name)
        redirect_to: 역할별 대시보드 경로 (Dashboard path for the role)
    """

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    role: str
    redirect_to: str


class RefreshRequest(BaseModel):
    """토큰 갱신 / 로그아웃 요청 스키마."""

    refresh_token: str


class AccountMeResponse(BaseModel):
    """현재 계정 정보 응답 스키마 (GET /auth/me).

    Attributes:
        id: 계정 UUID (Account identifier)
        email: 이메일 (Email)
        name: 이름 (Display name)
        address: 주소 (Address)
        role: 역할 (Role name)
        created_at: 가입 일시 (Registration timestamp)
    """

    id: str
    email: str
    name: str
    address: str
    role: str
    created_at: datetime | None = None


class PasswordChangeRequest(BaseModel):
    """비밀번호 변경 요청 스키마.

    Attributes:
        new_password: 새 비밀번호 (New password, must satisfy the password rule)
        confirm_password: 새 비밀번호 확인 (Must equal new_password)
    """

    new_password: str
    confirm_password: str
