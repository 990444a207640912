import pytest
from httpx import AsyncClient

from tests.utils.cookies import refresh_cookie


@pytest.mark.asyncio
async def test_register_refresh_revoke_scenario(client: AsyncClient):
    """Register -> refresh -> replay fails -> logout -> refresh fails"""
    register = await client.post(
        "/auth/register",
        json={"display_name": "Ada", "email": "ada@x.com", "password": "password1"},
    )
    assert register.status_code == 201
    r1 = refresh_cookie(register)

    refresh = await client.post("/auth/refresh", json={"refresh_token": r1})
    assert refresh.status_code == 200
    r2 = refresh_cookie(refresh)
    assert r1 != r2

    replay = await client.post("/auth/refresh", json={"refresh_token": r1})
    assert replay.status_code == 401

    logout = await client.post("/auth/logout", json={"refresh_token": r2})
    assert logout.status_code == 204

    after_logout = await client.post("/auth/refresh", json={"refresh_token": r2})
    assert after_logout.status_code == 401
