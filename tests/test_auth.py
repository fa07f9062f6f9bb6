"""인증 API 테스트 — 역할별 로그인, 토큰 갱신, 로그아웃, /me, 비밀번호 변경.

Auth API tests — Role-scoped login, token refresh, logout, /me and
password change.
"""

from httpx import AsyncClient

from rate_review.repositories.account_repository import account_repository
from tests.conftest import (
    ADMIN_PASSWORD,
    OWNER_PASSWORD,
    USER_PASSWORD,
    auth_header,
    make_token,
)

AUTH = "/api/v1/auth"


class TestLogin:
    """역할별 로그인 테스트."""

    async def test_user_login_success(self, client: AsyncClient, user_account):
        """사용자 로그인 성공 — 대시보드 경로 포함."""
        res = await client.post(f"{AUTH}/login", json={
            "email": "user@example.com",
            "password": USER_PASSWORD,
            "role": "user",
        })
        assert res.status_code == 200
        data = res.json()
        assert data["token_type"] == "bearer"
        assert data["role"] == "user"
        assert data["redirect_to"] == "/pages/userdashboard"
        assert data["access_token"] and data["refresh_token"]

    async def test_role_is_case_insensitive(self, client: AsyncClient, owner_account):
        """역할 이름은 대소문자 무관."""
        res = await client.post(f"{AUTH}/login", json={
            "email": "owner@example.com",
            "password": OWNER_PASSWORD,
            "role": "Owner",
        })
        assert res.status_code == 200
        assert res.json()["redirect_to"] == "/pages/ownerdashboard"

    async def test_wrong_password(self, client: AsyncClient, user_account):
        """비밀번호 불일치 — 401 Invalid password."""
        res = await client.post(f"{AUTH}/login", json={
            "email": "user@example.com",
            "password": "WrongPass1!",
            "role": "user",
        })
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid password"

    async def test_password_is_case_sensitive(self, client: AsyncClient, user_account):
        res = await client.post(f"{AUTH}/login", json={
            "email": "user@example.com",
            "password": USER_PASSWORD.lower(),
            "role": "user",
        })
        assert res.status_code == 401

    async def test_not_registered(self, client: AsyncClient):
        """미가입 이메일 — 404 Please register."""
        res = await client.post(f"{AUTH}/login", json={
            "email": "nobody@example.com",
            "password": "Whatever1!",
            "role": "user",
        })
        assert res.status_code == 404
        assert res.json()["detail"] == "Please register"

    async def test_account_in_other_role_only(self, client: AsyncClient, admin_account):
        """다른 역할 테이블에만 있는 계정은 미가입으로 판정."""
        res = await client.post(f"{AUTH}/login", json={
            "email": "admin@example.com",
            "password": ADMIN_PASSWORD,
            "role": "user",
        })
        assert res.status_code == 404
        assert res.json()["detail"] == "Please register"

    async def test_account_deleted_between_lookups(self, client: AsyncClient, user_account, monkeypatch):
        """두 조회 사이에 계정이 삭제되면 미가입으로 판정 (500 아님)."""
        async def _no_row(*args, **kwargs):
            return None

        monkeypatch.setattr(account_repository, "get_by_credentials", _no_row)
        monkeypatch.setattr(account_repository, "get_by_email", _no_row)

        res = await client.post(f"{AUTH}/login", json={
            "email": "user@example.com",
            "password": USER_PASSWORD,
            "role": "user",
        })
        assert res.status_code == 404
        assert res.json()["detail"] == "Please register"

    async def test_invalid_role(self, client: AsyncClient, user_account):
        res = await client.post(f"{AUTH}/login", json={
            "email": "user@example.com",
            "password": USER_PASSWORD,
            "role": "superuser",
        })
        assert res.status_code == 400
        assert res.json()["detail"] == "Invalid role selected"


class TestTokens:
    """토큰 갱신 / 로그아웃 테스트."""

    async def _login(self, client: AsyncClient) -> dict:
        res = await client.post(f"{AUTH}/login", json={
            "email": "admin@example.com",
            "password": ADMIN_PASSWORD,
            "role": "admin",
        })
        assert res.status_code == 200
        return res.json()

    async def test_refresh_issues_new_pair(self, client: AsyncClient, admin_account):
        tokens = await self._login(client)
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 200
        data = res.json()
        assert data["role"] == "admin"
        assert data["refresh_token"] != tokens["refresh_token"]

    async def test_refresh_token_is_single_use(self, client: AsyncClient, admin_account):
        """사용된 리프레시 토큰은 재사용 불가."""
        tokens = await self._login(client)
        await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 401

    async def test_refresh_with_unknown_token(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": "not-a-token"})
        assert res.status_code == 401

    async def test_logout_revokes_refresh_token(self, client: AsyncClient, admin_account):
        tokens = await self._login(client)
        res = await client.post(f"{AUTH}/logout", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 204

        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 401


class TestMe:
    """현재 계정 조회 테스트."""

    async def test_me(self, client: AsyncClient, owner_token):
        res = await client.get(f"{AUTH}/me", headers=auth_header(owner_token))
        assert res.status_code == 200
        data = res.json()
        assert data["email"] == "owner@example.com"
        assert data["role"] == "owner"

    async def test_me_without_token(self, client: AsyncClient):
        res = await client.get(f"{AUTH}/me")
        assert res.status_code in (401, 403)

    async def test_me_with_refresh_token_rejected(self, client: AsyncClient, user_account):
        """리프레시 토큰으로는 인증 불가."""
        login = await client.post(f"{AUTH}/login", json={
            "email": "user@example.com",
            "password": USER_PASSWORD,
            "role": "user",
        })
        res = await client.get(f"{AUTH}/me", headers=auth_header(login.json()["refresh_token"]))
        assert res.status_code == 401

    async def test_token_role_picks_table(self, client: AsyncClient, user_account):
        """토큰의 역할 테이블에 없는 계정이면 401."""
        token = make_token(user_account, "admin")
        res = await client.get(f"{AUTH}/me", headers=auth_header(token))
        assert res.status_code == 401


class TestPasswordChange:
    """비밀번호 변경 테스트."""

    async def test_change_password(self, client: AsyncClient, user_token):
        res = await client.put(f"{AUTH}/password", json={
            "new_password": "NewPass9#",
            "confirm_password": "NewPass9#",
        }, headers=auth_header(user_token))
        assert res.status_code == 204

        res = await client.post(f"{AUTH}/login", json={
            "email": "user@example.com",
            "password": "NewPass9#",
            "role": "user",
        })
        assert res.status_code == 200

    async def test_change_revokes_refresh_tokens(self, client: AsyncClient, user_token):
        """비밀번호 변경 후 기존 리프레시 토큰은 무효."""
        login = await client.post(f"{AUTH}/login", json={
            "email": "user@example.com",
            "password": USER_PASSWORD,
            "role": "user",
        })
        old_refresh = login.json()["refresh_token"]

        res = await client.put(f"{AUTH}/password", json={
            "new_password": "NewPass9#",
            "confirm_password": "NewPass9#",
        }, headers=auth_header(user_token))
        assert res.status_code == 204

        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": old_refresh})
        assert res.status_code == 401

    async def test_mismatch(self, client: AsyncClient, user_token):
        res = await client.put(f"{AUTH}/password", json={
            "new_password": "NewPass9#",
            "confirm_password": "NewPass9$",
        }, headers=auth_header(user_token))
        assert res.status_code == 400
        assert res.json()["detail"] == "Passwords do not match"

    async def test_rule_violation(self, client: AsyncClient, user_token):
        res = await client.put(f"{AUTH}/password", json={
            "new_password": "nouppercase1!",
            "confirm_password": "nouppercase1!",
        }, headers=auth_header(user_token))
        assert res.status_code == 422
        assert res.json()["detail"] == {"password": "Password must include at least one uppercase letter"}
