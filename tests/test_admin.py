"""관리자 API 테스트 — 통계, 계정 목록/생성, 매장 목록.

Admin API tests — Dashboard statistics, cross-role account listing and
creation, and the admin store listing.
"""

from httpx import AsyncClient

from tests.conftest import auth_header

ADMIN = "/api/v1/admin"

NEW_ACCOUNT = {
    "email": "fresh@example.com",
    "password": "Fresh123!",
    "role": "owner",
    "name": "Freshly Created Owner Account",
    "address": "8 New Road",
}


class TestDashboardStats:
    """대시보드 통계 테스트."""

    async def test_stats(self, client: AsyncClient, user_token, owner_account, store, admin_token):
        """계정 수는 세 역할 테이블 합계."""
        await client.post(
            f"/api/v1/stores/{store.id}/ratings",
            json={"rating": 3},
            headers=auth_header(user_token),
        )

        res = await client.get(f"{ADMIN}/dashboard/stats", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json() == {"total_users": 3, "total_stores": 1, "total_ratings": 1}

    async def test_non_admin_forbidden(self, client: AsyncClient, owner_token):
        res = await client.get(f"{ADMIN}/dashboard/stats", headers=auth_header(owner_token))
        assert res.status_code == 403


class TestAccounts:
    """계정 목록/생성 테스트."""

    async def test_list_all_roles(self, client: AsyncClient, user_account, owner_account, admin_token):
        res = await client.get(f"{ADMIN}/accounts", headers=auth_header(admin_token))
        assert res.status_code == 200
        roles = {a["email"]: a["role"] for a in res.json()}
        assert roles == {
            "user@example.com": "user",
            "owner@example.com": "owner",
            "admin@example.com": "admin",
        }

    async def test_search_by_name(self, client: AsyncClient, user_account, owner_account, admin_token):
        res = await client.get(f"{ADMIN}/accounts", params={"search": "store owner"}, headers=auth_header(admin_token))
        assert [a["email"] for a in res.json()] == ["owner@example.com"]

    async def test_search_by_role(self, client: AsyncClient, user_account, owner_account, admin_token):
        """역할 이름으로 검색하면 해당 역할 계정 전체."""
        res = await client.get(f"{ADMIN}/accounts", params={"search": "owner"}, headers=auth_header(admin_token))
        assert [a["role"] for a in res.json()] == ["owner"]

    async def test_create_account(self, client: AsyncClient, admin_token):
        res = await client.post(f"{ADMIN}/accounts", json=NEW_ACCOUNT, headers=auth_header(admin_token))
        assert res.status_code == 201
        assert res.json()["role"] == "owner"

        res = await client.post("/api/v1/auth/login", json={
            "email": "fresh@example.com",
            "password": "Fresh123!",
            "role": "owner",
        })
        assert res.status_code == 200

    async def test_create_duplicate(self, client: AsyncClient, owner_account, admin_token):
        res = await client.post(f"{ADMIN}/accounts", json={
            **NEW_ACCOUNT,
            "email": "owner@example.com",
        }, headers=auth_header(admin_token))
        assert res.status_code == 409

    async def test_create_invalid(self, client: AsyncClient, admin_token):
        res = await client.post(f"{ADMIN}/accounts", json={
            **NEW_ACCOUNT,
            "password": "short",
        }, headers=auth_header(admin_token))
        assert res.status_code == 422
        assert res.json()["detail"] == {"password": "Password must be between 8 and 16 characters"}


class TestAdminStores:
    """관리자 매장 목록 테스트."""

    async def test_search_by_owner_email(self, client: AsyncClient, store, other_store, admin_token):
        res = await client.get(
            f"{ADMIN}/stores",
            params={"search": "other-owner@"},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 200
        assert [s["id"] for s in res.json()] == [str(other_store.id)]

    async def test_user_forbidden(self, client: AsyncClient, user_token):
        res = await client.get(f"{ADMIN}/stores", headers=auth_header(user_token))
        assert res.status_code == 403
