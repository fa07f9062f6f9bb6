"""가입 흐름 테스트 — 확인 메일, 콜백, 1회성 결과 쿠키.

Registration flow tests — Confirmation mail, the /auth/callback redirect,
and the read-once registration outcome cookies.
"""

import re
from datetime import timedelta

from httpx import AsyncClient
from sqlalchemy import select

from rate_review.models.account import UserAccount
from rate_review.models.pending_registration import PendingRegistration
from rate_review.repositories.pending_registration_repository import pending_registration_repository
from rate_review.utils.password import hash_password
from rate_review.utils.timestamps import utc_now

AUTH = "/api/v1/auth"
CALLBACK = "/auth/callback"

JANE = {
    "name": "Jane Doe Long Enough Name",
    "email": "jane@example.com",
    "password": "Passw0rd!",
    "address": "123 Main St",
    "role": "user",
}


def _token_from(mail: dict[str, str]) -> str:
    match = re.search(r"token=([\w-]+)", mail["text"])
    assert match is not None
    return match.group(1)


def _set_cookies(res) -> str:
    return "; ".join(res.headers.get_list("set-cookie"))


class TestBeginRegistration:
    """가입 시작 테스트."""

    async def test_pending_and_mail_sent(self, client: AsyncClient, db, outbox):
        """확인 메일 발송, 계정은 아직 생성되지 않음."""
        res = await client.post(f"{AUTH}/register", json=JANE)
        assert res.status_code == 201
        assert res.json() == {
            "status": "pending",
            "message": "Please check your email for the magic link to complete registration.",
        }
        assert len(outbox) == 1
        assert outbox[0]["to"] == "jane@example.com"
        assert "/auth/callback?token=" in outbox[0]["text"]

        result = await db.execute(select(UserAccount).where(UserAccount.email == "jane@example.com"))
        assert result.scalar_one_or_none() is None

    async def test_link_carries_no_password(self, client: AsyncClient, outbox):
        await client.post(f"{AUTH}/register", json=JANE)
        assert "Passw0rd" not in outbox[0]["text"]
        assert "Passw0rd" not in outbox[0]["html"]

    async def test_invalid_fields(self, client: AsyncClient, outbox):
        """형식 오류 — 422, 필드별 메시지, 메일 미발송."""
        res = await client.post(f"{AUTH}/register", json={
            **JANE,
            "name": "Too Short",
            "password": "Abcdefg1",
        })
        assert res.status_code == 422
        assert res.json()["detail"] == {
            "name": "Name must be between 20 and 60 characters",
            "password": "Password must include at least one special character",
        }
        assert outbox == []

    async def test_email_typo_hint(self, client: AsyncClient, outbox):
        res = await client.post(f"{AUTH}/register", json={**JANE, "email": "jane@gamil.com"})
        assert res.status_code == 422
        assert res.json()["detail"] == {"email": "Did you mean jane@gmail.com?"}

    async def test_already_registered(self, client: AsyncClient, user_account, outbox):
        """같은 역할에 이미 있는 이메일 — 409."""
        res = await client.post(f"{AUTH}/register", json={**JANE, "email": "user@example.com"})
        assert res.status_code == 409
        assert res.json()["detail"] == "Email already registered. Please login instead."
        assert outbox == []

    async def test_same_email_other_role_allowed(self, client: AsyncClient, user_account, outbox):
        """역할 간에는 이메일 중복 허용."""
        res = await client.post(f"{AUTH}/register", json={
            **JANE,
            "email": "user@example.com",
            "role": "owner",
        })
        assert res.status_code == 201
        assert len(outbox) == 1

    async def test_invalid_role(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/register", json={**JANE, "role": "guest"})
        assert res.status_code == 400

    async def test_mail_failure_surfaces(self, client: AsyncClient, db, monkeypatch):
        """메일 발송 실패 — 502, 대기 레코드 미저장."""
        async def _broken_send_email(*args, **kwargs):
            raise OSError("Connection refused")

        monkeypatch.setattr("rate_review.services.registration_service.send_email", _broken_send_email)
        res = await client.post(f"{AUTH}/register", json=JANE)
        assert res.status_code == 502
        assert res.json()["detail"] == "Connection refused"

        await db.rollback()
        result = await db.execute(select(PendingRegistration))
        assert result.scalars().all() == []


class TestCompleteRegistration:
    """확인 링크 콜백 테스트."""

    async def test_full_flow(self, client: AsyncClient, db, outbox):
        """가입 → 링크 확인 → 대시보드 리다이렉트 → 로그인."""
        await client.post(f"{AUTH}/register", json=JANE)
        token = _token_from(outbox[0])

        res = await client.get(CALLBACK, params={"token": token})
        assert res.status_code == 303
        assert res.headers["location"] == "/pages/userdashboard"
        assert "registration_success=true" in _set_cookies(res)

        result = await db.execute(select(UserAccount).where(UserAccount.email == "jane@example.com"))
        account = result.scalar_one()
        assert account.name == "Jane Doe Long Enough Name"
        assert account.address == "123 Main St"
        assert account.password_hash != "Passw0rd!"

        res = await client.post(f"{AUTH}/login", json={
            "email": "jane@example.com",
            "password": "Passw0rd!",
            "role": "user",
        })
        assert res.status_code == 200
        assert res.json()["redirect_to"] == "/pages/userdashboard"

    async def test_link_is_single_use(self, client: AsyncClient, outbox):
        await client.post(f"{AUTH}/register", json=JANE)
        token = _token_from(outbox[0])
        await client.get(CALLBACK, params={"token": token})

        res = await client.get(CALLBACK, params={"token": token})
        assert res.status_code == 303
        assert res.headers["location"] == "/"
        assert "Invalid or already used confirmation link" in _set_cookies(res)

    async def test_newer_link_replaces_older(self, client: AsyncClient, outbox):
        """같은 이메일로 다시 가입하면 이전 링크는 무효."""
        await client.post(f"{AUTH}/register", json=JANE)
        await client.post(f"{AUTH}/register", json=JANE)
        first, second = _token_from(outbox[0]), _token_from(outbox[1])

        res = await client.get(CALLBACK, params={"token": first})
        assert res.headers["location"] == "/"

        res = await client.get(CALLBACK, params={"token": second})
        assert res.headers["location"] == "/pages/userdashboard"

    async def test_missing_token(self, client: AsyncClient):
        res = await client.get(CALLBACK)
        assert res.status_code == 303
        assert res.headers["location"] == "/"
        assert "Missing confirmation token" in _set_cookies(res)

    async def test_expired_token(self, client: AsyncClient, db):
        """만료된 링크 — 오류 쿠키, 대기 레코드 삭제."""
        db.add(PendingRegistration(
            token="expired-token",
            role="owner",
            email="late@example.com",
            name="Late Owner With Long Name",
            address="5 Slow Lane",
            password_hash=hash_password("Passw0rd!"),
            expires_at=utc_now() - timedelta(hours=1),
        ))
        await db.commit()

        res = await client.get(CALLBACK, params={"token": "expired-token"})
        assert res.status_code == 303
        assert res.headers["location"] == "/"
        assert "Confirmation link has expired" in _set_cookies(res)
        assert await pending_registration_repository.get_by_token(db, "expired-token") is None

    async def test_registered_meanwhile(self, client: AsyncClient, db, outbox):
        """링크 확인 전에 같은 이메일이 가입되면 중복 오류."""
        await client.post(f"{AUTH}/register", json=JANE)
        token = _token_from(outbox[0])

        db.add(UserAccount(
            email="jane@example.com",
            name="Another Jane With Long Name",
            address="7 Other St",
            password_hash=hash_password("Other0ne!"),
        ))
        await db.commit()

        res = await client.get(CALLBACK, params={"token": token})
        assert res.status_code == 303
        assert res.headers["location"] == "/"
        assert "Email already registered. Please login instead." in _set_cookies(res)
        assert await pending_registration_repository.get_by_token(db, token) is None


class TestRegistrationStatus:
    """1회성 가입 결과 조회 테스트."""

    async def test_no_outcome(self, client: AsyncClient):
        res = await client.get(f"{AUTH}/registration-status")
        assert res.status_code == 200
        assert res.json() == {"success": False, "error": None}

    async def test_success_flag_read_and_cleared(self, client: AsyncClient):
        res = await client.get(
            f"{AUTH}/registration-status",
            headers={"Cookie": "registration_success=true"},
        )
        assert res.json() == {"success": True, "error": None}

        cleared = _set_cookies(res)
        assert "registration_success=" in cleared
        assert "registration_error=" in cleared
        assert "Max-Age=0" in cleared

    async def test_error_flag(self, client: AsyncClient):
        res = await client.get(
            f"{AUTH}/registration-status",
            headers={"Cookie": 'registration_error="Confirmation link has expired"'},
        )
        assert res.json() == {"success": False, "error": "Confirmation link has expired"}
