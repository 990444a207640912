import pytest
from httpx import AsyncClient

JSON_HEADERS = {"Content-Type": "application/json"}


@pytest.mark.asyncio
async def test_refresh_with_lone_surrogate(client: AsyncClient):
    """A JSON string with a lone surrogate is a failed refresh, not a crash"""
    response = await client.post(
        "/auth/refresh", content=b'{"refresh_token": "\\ud800abc"}', headers=JSON_HEADERS
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_logout_with_lone_surrogate(client: AsyncClient):
    response = await client.post(
        "/auth/logout", content=b'{"refresh_token": "\\ud800abc"}', headers=JSON_HEADERS
    )

    assert response.status_code == 204


@pytest.mark.asyncio
async def test_login_with_lone_surrogate(client: AsyncClient):
    response = await client.post(
        "/auth/login",
        content=b'{"email": "ada\\ud800@x.com", "password": "password1"}',
        headers=JSON_HEADERS,
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_register_with_lone_surrogate(client: AsyncClient):
    response = await client.post(
        "/auth/register",
        content=b'{"display_name": "Ada\\ud800", "email": "ada@x.com", "password": "password1"}',
        headers=JSON_HEADERS,
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_DISPLAY_NAME"
