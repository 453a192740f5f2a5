"""集成测试共享 fixture"""

from collections.abc import AsyncGenerator

import pytest_asyncio
from complymate.core.session import create_session
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def integration_app(directory, fixed_clock):
    """集成测试用 FastAPI app"""
    from complymate.gateway.main import create_app

    app = create_app()
    app.state.session = create_session(directory, clock=fixed_clock)

    yield app


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac
