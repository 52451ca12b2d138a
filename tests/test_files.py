"""Tests for file upload, listing, serving & deletion."""

import pytest
from httpx import AsyncClient

from cleo.main import app
from cleo.services.storage import FileStorage, get_storage


async def _upload(client: AsyncClient, token: str, name: str = "hello.txt", data: bytes = b"hello"):
    return await client.post(
        "/files/create",
        files={"file": (name, data, "text/plain")},
        data={"name": name, "api_token": token},
    )


@pytest.mark.asyncio
async def test_upload_and_serve(async_client: AsyncClient, make_user, tmp_path):
    token = await make_user("alice")
    resp = await _upload(async_client, token)
    assert resp.status_code == 200, resp.text
    record = resp.json()
    assert record["file_name"] == "hello.txt"
    assert record["file_url"] == f"http://cleo.test/files/serve/{record['file_id']}"
    assert (tmp_path / "files" / "hello.txt").read_bytes() == b"hello"

    served = await async_client.get(f"/files/serve/{record['file_id']}")
    assert served.status_code == 200
    assert served.content == b"hello"


@pytest.mark.asyncio
async def test_list_files(async_client: AsyncClient, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await _upload(async_client, alice, "a.txt")
    await _upload(async_client, bob, "b.txt")

    files = (await async_client.post("/files/all", json={"api_token": alice})).json()["files"]
    assert [f["file_name"] for f in files] == ["a.txt"]


@pytest.mark.asyncio
async def test_duplicate_name_rejected(async_client: AsyncClient, make_user):
    token = await make_user("alice")
    assert (await _upload(async_client, token)).status_code == 200
    resp = await _upload(async_client, token)
    assert resp.status_code == 400
    assert "already exists" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_name_reduced_to_basename(async_client: AsyncClient, make_user, tmp_path):
    token = await make_user("alice")
    resp = await _upload(async_client, token, name="../../evil.txt")
    assert resp.status_code == 200
    assert resp.json()["file_name"] == "evil.txt"
    assert (tmp_path / "files" / "evil.txt").exists()


@pytest.mark.asyncio
async def test_dot_names_rejected(async_client: AsyncClient, make_user):
    token = await make_user("alice")
    resp = await _upload(async_client, token, name="..")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid file name."


@pytest.mark.asyncio
async def test_oversize_upload_rejected(async_client: AsyncClient, make_user, tmp_path):
    token = await make_user("alice")
    app.dependency_overrides[get_storage] = lambda: FileStorage(max_bytes=4)
    try:
        resp = await _upload(async_client, token, name="big.bin", data=b"0123456789")
    finally:
        app.dependency_overrides.pop(get_storage)
    assert resp.status_code == 400
    assert "byte limit" in resp.json()["detail"]
    assert not (tmp_path / "files" / "big.bin").exists()


@pytest.mark.asyncio
async def test_owner_deletes_file(async_client: AsyncClient, make_user, tmp_path):
    token = await make_user("alice")
    record = (await _upload(async_client, token)).json()

    resp = await async_client.post("/files/delete", json={"api_token": token, "file_id": record["file_id"]})
    assert resp.status_code == 200
    assert not (tmp_path / "files" / "hello.txt").exists()

    served = await async_client.get(f"/files/serve/{record['file_id']}")
    assert served.status_code == 400


@pytest.mark.asyncio
async def test_non_owner_cannot_delete(async_client: AsyncClient, make_user, tmp_path):
    alice = await make_user("alice")
    bob = await make_user("bob")
    record = (await _upload(async_client, alice)).json()

    resp = await async_client.post("/files/delete", json={"api_token": bob, "file_id": record["file_id"]})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "You do not own this file."
    assert (tmp_path / "files" / "hello.txt").exists()


@pytest.mark.asyncio
async def test_serve_unknown_file(async_client: AsyncClient):
    resp = await async_client.get("/files/serve/DEADBEEF")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "File not found."
