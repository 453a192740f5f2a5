"""apps/gateway 测试配置 -- FastAPI app + httpx AsyncClient fixture"""

from collections.abc import AsyncGenerator

import pytest_asyncio
from complymate.core.session import create_session
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def app(directory, fixed_clock):
    """创建测试用 FastAPI app 实例"""
    from complymate.gateway.main import create_app

    application = create_app()

    # 手动初始化（绕过 lifespan）
    application.state.session = create_session(directory, clock=fixed_clock)
    yield application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_client(client: AsyncClient) -> AsyncClient:
    """已以 Admin 身份登录的客户端"""
    resp = await client.post("/api/session/login", json={"user_id": "a1", "password": "secret"})
    assert resp.status_code == 200
    return client
