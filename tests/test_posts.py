"""Tests for post CRUD and ownership enforcement."""

import pytest
from httpx import AsyncClient


async def _create(client: AsyncClient, token: str, text: str = "<h1>Hi</h1>", kind: str = "post") -> dict:
    resp = await client.post(
        "/posts/create",
        json={"api_token": token, "content_type": kind, "content_text": text},
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_create_post(async_client: AsyncClient, make_user):
    token = await make_user("alice")
    post = await _create(async_client, token)
    assert post["content_type"] == "post"
    assert post["content_text"] == "<h1>Hi</h1>"
    assert len(post["content_id"]) == 64


@pytest.mark.asyncio
async def test_create_page(async_client: AsyncClient, make_user):
    token = await make_user("alice")
    page = await _create(async_client, token, text="About me", kind="page")
    assert page["content_type"] == "page"


@pytest.mark.asyncio
async def test_unknown_content_type_rejected(async_client: AsyncClient, make_user):
    token = await make_user("alice")
    resp = await async_client.post(
        "/posts/create",
        json={"api_token": token, "content_type": "essay", "content_text": "x"},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert isinstance(body["detail"], str)
    assert "content_type" in body["detail"]


@pytest.mark.asyncio
async def test_list_only_own_posts(async_client: AsyncClient, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await _create(async_client, alice, text="one")
    await _create(async_client, alice, text="two")
    await _create(async_client, bob, text="three")

    resp = await async_client.post("/posts/all", json={"api_token": alice})
    assert resp.status_code == 200
    assert sorted(p["content_text"] for p in resp.json()["posts"]) == ["one", "two"]


@pytest.mark.asyncio
async def test_owner_can_update(async_client: AsyncClient, make_user):
    token = await make_user("alice")
    post = await _create(async_client, token)
    resp = await async_client.post(
        "/posts/update",
        json={"api_token": token, "content_id": post["content_id"], "text": "edited"},
    )
    assert resp.status_code == 200
    posts = (await async_client.post("/posts/all", json={"api_token": token})).json()["posts"]
    assert posts[0]["content_text"] == "edited"


@pytest.mark.asyncio
async def test_non_owner_cannot_update_or_delete(async_client: AsyncClient, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    post = await _create(async_client, alice)

    resp = await async_client.post(
        "/posts/update",
        json={"api_token": bob, "content_id": post["content_id"], "text": "pwned"},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "You do not own this post."

    resp = await async_client.post("/posts/delete", json={"api_token": bob, "content_id": post["content_id"]})
    assert resp.status_code == 400

    posts = (await async_client.post("/posts/all", json={"api_token": alice})).json()["posts"]
    assert posts[0]["content_text"] == "<h1>Hi</h1>"


@pytest.mark.asyncio
async def test_owner_can_delete(async_client: AsyncClient, make_user):
    token = await make_user("alice")
    post = await _create(async_client, token)
    resp = await async_client.post("/posts/delete", json={"api_token": token, "content_id": post["content_id"]})
    assert resp.status_code == 200
    assert (await async_client.post("/posts/all", json={"api_token": token})).json()["posts"] == []

    # Deleting again is a miss
    resp = await async_client.post("/posts/delete", json={"api_token": token, "content_id": post["content_id"]})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Post not found."
