"""가입 서비스 — 확인 메일 기반 2단계 회원가입.

Registration Service — Two-phase registration across an email
confirmation gap.

Flow:
    1. begin_registration: 형식 검증 → 중복 확인 → 가입 대기 레코드 저장 →
       확인 링크 메일 발송. 링크에는 불투명 토큰만 실린다.
       (Validate, check duplicates, store a pending record, email a link
       carrying only an opaque token.)
    2. complete_registration: 링크의 토큰으로 가입 대기 레코드를 찾아
       역할 테이블에 계정 행을 추가하고 대기 레코드를 삭제한다.
       (Look the token up, insert the account row, drop the pending record.)
"""

import secrets
from dataclasses import dataclass
from datetime import timedelta

import aiosmtplib
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rate_review.config import settings
from rate_review.models.account import AccountMixin, AccountRole
from rate_review.models.pending_registration import PendingRegistration
from rate_review.repositories.account_repository import account_repository
from rate_review.repositories.pending_registration_repository import pending_registration_repository
from rate_review.schemas.auth import RegisterRequest, RegistrationPendingResponse
from rate_review.services.auth_service import resolve_role
from rate_review.utils.email import build_confirmation_email, build_confirmation_link, send_email
from rate_review.utils.exceptions import (
    BadRequestError,
    DuplicateError,
    ExternalServiceError,
    ValidationFailedError,
)
from rate_review.utils.password import hash_password
from rate_review.utils.timestamps import as_utc, utc_now
from rate_review.utils.validation import validate_registration_form

ALREADY_REGISTERED_MESSAGE: str = "Email already registered. Please login instead."


@dataclass
class CompletedRegistration:
    """가입 완료 결과 — 생성된 계정과 역할."""

    account: AccountMixin
    role: AccountRole


class RegistrationService:
    """회원가입 비즈니스 로직을 처리하는 서비스."""

    async def begin_registration(
        self,
        db: AsyncSession,
        data: RegisterRequest,
    ) -> RegistrationPendingResponse:
        """가입을 시작하고 확인 링크를 메일로 보냅니다.

        Start a registration: validate the form, reject an email already
        present in the role's table, persist a pending record and email the
        confirmation link.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 가입 요청 데이터 (Registration form)

        Returns:
            RegistrationPendingResponse: 확인 대기 응답 (Pending response)

        Raises:
            BadRequestError: 알 수 없는 역할 (Unknown role)
            ValidationFailedError: 형식 규칙 위반 (Field format rules violated)
            DuplicateError: 이미 가입된 이메일 (Email already registered under the role)
            ExternalServiceError: 메일 발송 실패 (Mail transport failure)
        """
        role: AccountRole = resolve_role(data.role)

        # 형식 검증 — 네트워크/DB 작업 전에 수행 (Validated before any I/O)
        errors: dict[str, str] = validate_registration_form({
            "name": data.name,
            "email": data.email,
            "password": data.password,
            "address": data.address,
        })
        if errors:
            raise ValidationFailedError(errors)

        existing: AccountMixin | None = await account_repository.get_by_email(db, role, data.email)
        if existing is not None:
            raise DuplicateError(ALREADY_REGISTERED_MESSAGE)

        # 만료된 대기 레코드 정리, 같은 이메일의 이전 링크는 무효화
        # Purge expired records; only the newest link for an email stays valid
        await pending_registration_repository.delete_expired(db, utc_now())
        await pending_registration_repository.delete_for_email(db, role.value, data.email)

        token: str = secrets.token_urlsafe(32)
        await pending_registration_repository.create(
            db,
            {
                "token": token,
                "role": role.value,
                "email": data.email,
                "name": data.name,
                "address": data.address,
                "password_hash": hash_password(data.password),
                "expires_at": utc_now() + timedelta(hours=settings.CONFIRMATION_TOKEN_EXPIRE_HOURS),
            },
        )

        link: str = build_confirmation_link(token)
        html, text = build_confirmation_email(data.name, link)
        try:
            await send_email(data.email, "Confirm your Rate & Review registration", html, text)
        except (aiosmtplib.SMTPException, OSError) as exc:
            raise ExternalServiceError(str(exc))

        return RegistrationPendingResponse()

    async def complete_registration(
        self,
        db: AsyncSession,
        token: str | None,
    ) -> CompletedRegistration:
        """확인 링크의 토큰으로 가입을 완료합니다.

        Finish a registration when its confirmation link is followed: the
        pending record is turned into a row of the role's table. Uniqueness
        is not re-checked up front; the table's unique email constraint
        reports a registration that won a race in the meantime.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            token: 확인 링크의 토큰 (Token from the confirmation link)

        Returns:
            CompletedRegistration: 생성된 계정과 역할 (Created account and role)

        Raises:
            BadRequestError: 토큰 누락/무효/만료 (Missing, unknown or expired token)
            DuplicateError: 그사이 같은 이메일이 가입됨 (Email registered meanwhile)
        """
        if not token:
            raise BadRequestError("Missing confirmation token")

        pending: PendingRegistration | None = await pending_registration_repository.get_by_token(db, token)
        if pending is None:
            raise BadRequestError("Invalid or already used confirmation link")

        if as_utc(pending.expires_at) < utc_now():
            await pending_registration_repository.delete(db, pending.id)
            raise BadRequestError("Confirmation link has expired")

        if not pending.email:
            raise BadRequestError("No email found for registration")

        role: AccountRole = resolve_role(pending.role)
        pending_id = pending.id
        try:
            account: AccountMixin = await account_repository.create(
                db,
                role,
                {
                    "email": pending.email,
                    "name": pending.name,
                    "address": pending.address,
                    "password_hash": pending.password_hash,
                    "created_at": utc_now(),
                },
            )
        except IntegrityError:
            # 실패한 트랜잭션을 버리고 쓸모없어진 대기 레코드만 정리
            # Discard the failed transaction, then drop the stale pending record
            await db.rollback()
            await pending_registration_repository.delete(db, pending_id)
            raise DuplicateError(ALREADY_REGISTERED_MESSAGE)

        await pending_registration_repository.delete(db, pending_id)
        return CompletedRegistration(account=account, role=role)


# 싱글턴 인스턴스 — Singleton instance
registration_service: RegistrationService = RegistrationService()
