"""Tests for the email verification link."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_verification_round_trip(async_client: AsyncClient, admin_token: str, make_user, mailer):
    await make_user("alice")
    token = mailer.last_token()

    resp = await async_client.get(f"/email/{token}")
    assert resp.status_code == 200
    assert resp.json() == {"is_ok": True}

    users = (await async_client.post("/instance/users", json={"api_token": admin_token})).json()["users"]
    assert next(u for u in users if u["username"] == "alice")["is_verified"] is True

    # Token is single-use
    resp = await async_client.get(f"/email/{token}")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email token not found."


@pytest.mark.asyncio
async def test_unknown_token(async_client: AsyncClient):
    resp = await async_client.get("/email/NOTATOKEN")
    assert resp.status_code == 400
