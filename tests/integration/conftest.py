"""Integration-test fixtures.

Each test gets a fresh engine (with the shared ManualClock) and a fresh
user store, wired into the app through dependency overrides.
"""

from collections.abc import AsyncIterator, Awaitable, Callable

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.pm_engine.dependencies import get_engine
from src.pm_engine.engine import ExchangeEngine
from src.pm_gateway.auth.dependencies import get_user_service
from src.pm_gateway.user.service import UserService

PASSWORD = "TestPass123"

SignUp = Callable[[str], Awaitable[tuple[str, dict[str, str]]]]


@pytest.fixture
async def client(engine: ExchangeEngine) -> AsyncIterator[AsyncClient]:
    users = UserService()
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_user_service] = lambda: users
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def sign_up(client: AsyncClient) -> SignUp:
    """Register + login; returns (user_id, auth headers)."""

    async def _sign_up(username: str) -> tuple[str, dict[str, str]]:
        reg = await client.post("/api/v1/auth/register", json={
            "username": username,
            "email": f"{username}@example.com",
            "password": PASSWORD,
        })
        assert reg.status_code == 201, reg.text
        login = await client.post("/api/v1/auth/login", json={
            "username": username,
            "password": PASSWORD,
        })
        assert login.status_code == 200, login.text
        data = login.json()["data"]
        return data["user"]["user_id"], {"Authorization": f"Bearer {data['access_token']}"}

    return _sign_up
