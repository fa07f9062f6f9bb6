"""가입 확인 콜백 라우터 — 확인 메일 링크의 도착 지점.

Confirmation Callback Router — Target of the link in the confirmation
email. Served at the site root (``/auth/callback``), not under ``/api/v1``,
because browsers land on it directly.

Outcome:
    성공 → registration_success 쿠키 + /pages/{role}dashboard 로 303
    (Success: set registration_success, redirect to the role's dashboard)
    실패 → registration_error 쿠키 + / 로 303
    (Failure: store the message in registration_error, redirect to /)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from rate_review.api.auth import REGISTRATION_ERROR_COOKIE, REGISTRATION_SUCCESS_COOKIE
from rate_review.config import settings
from rate_review.database import get_db
from rate_review.services.registration_service import CompletedRegistration, registration_service

router: APIRouter = APIRouter()


def _frontend_url(path: str) -> str:
    return f"{settings.FRONTEND_BASE_URL.rstrip('/')}{path}"


@router.get("/auth/callback")
async def registration_callback(
    db: Annotated[AsyncSession, Depends(get_db)],
    token: str | None = None,
) -> RedirectResponse:
    """가입 확인 링크 처리 — 계정 생성 후 리다이렉트.

    Complete the registration named by ``token`` and redirect the browser.
    Failures are reported through a one-shot cookie rather than an error
    page. Cleanup done before the failure (an expired pending record) is
    still committed.
    """
    try:
        completed: CompletedRegistration = await registration_service.complete_registration(db, token)
    except HTTPException as exc:
        await db.commit()
        response = RedirectResponse(_frontend_url("/"), status_code=303)
        response.set_cookie(REGISTRATION_ERROR_COOKIE, str(exc.detail), httponly=True, samesite="lax")
        return response

    await db.commit()
    response = RedirectResponse(_frontend_url(completed.role.dashboard_path), status_code=303)
    response.set_cookie(REGISTRATION_SUCCESS_COOKIE, "true", httponly=True, samesite="lax")
    return response
