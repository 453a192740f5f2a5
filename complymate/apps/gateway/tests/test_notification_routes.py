"""通知路由测试 -- 列表、已读、重复扫描"""

from httpx import AsyncClient


class TestNotifications:
    async def test_requires_user(self, client: AsyncClient):
        """未登录且未指定 user_id 时 403"""
        resp = await client.get("/api/notifications")
        assert resp.status_code == 403
        assert resp.json()["error"]["code"] == "NOT_AUTHENTICATED"

    async def test_defaults_to_current_user(self, admin_client: AsyncClient):
        resp = await admin_client.get("/api/notifications")
        data = resp.json()
        assert data["user_id"] == "a1"
        assert data["unread_count"] == 1
        assert data["notifications"][0]["type"] == "REMINDER"

    async def test_mark_read(self, client: AsyncClient):
        inbox = await client.get("/api/notifications", params={"user_id": "a1"})
        notification_id = inbox.json()["notifications"][0]["notification_id"]

        resp = await client.post(f"/api/notifications/{notification_id}/read")
        assert resp.json() == {"applied": True}
        again = await client.post(f"/api/notifications/{notification_id}/read")
        assert again.json() == {"applied": False}

        inbox = await client.get("/api/notifications", params={"user_id": "a1"})
        assert inbox.json()["unread_count"] == 0

    async def test_scan_accumulates(self, client: AsyncClient):
        """重复扫描追加重复通知"""
        resp = await client.post("/api/notifications/scan")
        assert resp.json()["created"] == 1

        inbox = await client.get("/api/notifications", params={"user_id": "a1"})
        messages = [n["message"] for n in inbox.json()["notifications"]]
        assert messages == ["Alert: PF Payment is due today!"] * 2

    async def test_other_user_empty(self, client: AsyncClient):
        resp = await client.get("/api/notifications", params={"user_id": "b1"})
        assert resp.json()["notifications"] == []
