"""관리자 대시보드 Pydantic 스키마 정의.

Admin dashboard Pydantic schema definitions.
"""

from datetime import datetime

from pydantic import BaseModel


class DashboardStatsResponse(BaseModel):
    """플랫폼 통계 응답.

    Attributes:
        total_users: 세 역할 테이블의 계정 합계 (Accounts across users/owners/admins)
        total_stores: 매장 수 (Store count)
        total_ratings: 평점 수 (Rating count)
    """

    total_users: int
    total_stores: int
    total_ratings: int


class AccountListItem(BaseModel):
    """역할이 표시된 계정 목록 항목."""

    id: str
    email: str
    name: str
    address: str
    role: str
    created_at: datetime | None = None


class AccountCreate(BaseModel):
    """관리자 계정 생성 요청 — 확인 메일 없이 즉시 생성.

    Attributes:
        email: 이메일 (Email)
        password: 비밀번호 (Plain text, stored as bcrypt hash)
        role: 역할 (user / owner / admin)
        name: 이름 (Display name)
        address: 주소 (Address)
    """

    email: str
    password: str
    role: str = "user"
    name: str
    address: str
