"""가입 대기 모델 — 이메일 확인 전까지 프로필 데이터를 보관.

Pending registration model. Holds the profile a visitor submitted until
they follow the emailed confirmation link. The link carries only the
opaque ``token``; name, address and password hash stay server-side.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from rate_review.database import Base


class PendingRegistration(Base):
    """가입 대기 테이블.

    Attributes:
        id: 고유 식별자 (Primary key UUID)
        token: 확인 링크 토큰 (Opaque confirmation token)
        role: 가입 역할 (Target role name: user/owner/admin)
        email: 이메일 (Email to register)
        name: 이름 (Display name)
        address: 주소 (Address)
        password_hash: bcrypt 해시 (Hashed password, copied into the account row)
        expires_at: 만료 일시 (Expiration timestamp)
        created_at: 생성 일시 (Creation timestamp)
    """

    __tablename__ = "pending_registrations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    token: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(60), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False, default="")
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
