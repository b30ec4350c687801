"""Presigned image upload tests. S3 calls are patched out."""

import pytest
from botocore.exceptions import ClientError
from httpx import AsyncClient

from storefront.api.v1 import storage as storage_api
from storefront.core.config import settings
from storefront.services.storage import MAX_UPLOAD_SIZE, build_owner_key, safe_file_name
from tests.helpers import new_owner

pytestmark = pytest.mark.api


@pytest.fixture
def fake_s3(monkeypatch):
    calls: dict[str, list] = {"put": [], "delete": []}

    def _presign_put(key: str, content_type: str) -> str:
        calls["put"].append((key, content_type))
        return f"https://s3.test/{key}?signature=abc"

    def _delete_object(key: str) -> None:
        calls["delete"].append(key)

    monkeypatch.setattr(storage_api, "presign_put", _presign_put)
    monkeypatch.setattr(storage_api, "delete_object", _delete_object)
    monkeypatch.setattr(settings, "S3_PUBLIC_BASE_URL", "https://cdn.example.com")
    return calls


def test_safe_file_name():
    assert safe_file_name("  my qr code.png ") == "my_qr_code.png"
    assert "/" not in safe_file_name("../../etc/passwd")


def test_build_owner_key_rejects_unknown_folder():
    with pytest.raises(ValueError):
        build_owner_key("owner", "secrets", "a.png")


async def test_upload_url_is_scoped_to_owner(client: AsyncClient, fake_s3):
    headers, _ = new_owner("upload")
    me = (await client.get("/api/v1/auth/me", headers=headers)).json()["data"]

    resp = await client.post(
        "/api/v1/storage/upload-url",
        json={
            "file_name": "qr code.png",
            "content_type": "image/png",
            "size_bytes": 1024,
            "folder": "payment",
        },
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()["data"]
    assert data["key"].startswith(f"{me['id']}/payment/")
    assert data["key"].endswith("-qr_code.png")
    assert data["public_url"] == f"https://cdn.example.com/{data['key']}"
    assert data["upload_url"].startswith("https://s3.test/")
    assert data["expires_in"] == 900
    assert fake_s3["put"] == [(data["key"], "image/png")]


@pytest.mark.parametrize(
    "overrides",
    [
        {"content_type": "application/pdf"},
        {"size_bytes": MAX_UPLOAD_SIZE + 1},
        {"size_bytes": 0},
        {"folder": "private"},
    ],
)
async def test_upload_url_validation(client: AsyncClient, fake_s3, overrides):
    headers, _ = new_owner("upload-val")
    body = {
        "file_name": "logo.png",
        "content_type": "image/png",
        "size_bytes": 2048,
        **overrides,
    }
    resp = await client.post("/api/v1/storage/upload-url", json=body, headers=headers)
    assert resp.status_code == 422
    assert fake_s3["put"] == []


async def test_customer_cannot_request_upload(client: AsyncClient, fake_s3):
    headers, _ = new_owner("upload-cust", role="customer")
    resp = await client.post(
        "/api/v1/storage/upload-url",
        json={"file_name": "a.png", "content_type": "image/png", "size_bytes": 10},
        headers=headers,
    )
    assert resp.status_code == 403


async def test_delete_image_uses_owner_prefix(client: AsyncClient, fake_s3):
    headers, _ = new_owner("img-del")
    me = (await client.get("/api/v1/auth/me", headers=headers)).json()["data"]

    resp = await client.delete("/api/v1/storage/images/products/abc-mug.png", headers=headers)
    assert resp.status_code == 200
    assert fake_s3["delete"] == [f"{me['id']}/products/abc-mug.png"]

    resp = await client.delete("/api/v1/storage/images/other/abc.png", headers=headers)
    assert resp.status_code == 404


async def test_delete_image_storage_failure_is_502(client: AsyncClient, monkeypatch):
    def _fail(key: str) -> None:
        raise ClientError({"Error": {"Code": "AccessDenied", "Message": "nope"}}, "DeleteObject")

    monkeypatch.setattr(storage_api, "delete_object", _fail)
    headers, _ = new_owner("img-fail")
    resp = await client.delete("/api/v1/storage/images/store/banner.png", headers=headers)
    assert resp.status_code == 502
