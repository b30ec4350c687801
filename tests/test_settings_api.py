"""Settings endpoint tests, including the sync each write triggers."""

import uuid

import pytest
from httpx import AsyncClient

from tests.helpers import create_settings, new_owner, unique_subdomain

pytestmark = pytest.mark.api


async def _template(client: AsyncClient, headers: dict) -> dict | None:
    resp = await client.get("/api/v1/store-templates", headers=headers)
    assert resp.status_code == 200
    return resp.json()["data"]


async def test_settings_require_auth(client: AsyncClient):
    resp = await client.get("/api/v1/settings")
    assert resp.status_code == 401


async def test_list_is_empty_before_create(client: AsyncClient):
    headers, _email = new_owner("set-empty")
    resp = await client.get("/api/v1/settings", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": [], "message": None}


async def test_create_settings_requires_core_fields(client: AsyncClient):
    headers, email = new_owner("set-req")
    resp = await client.post(
        "/api/v1/settings",
        json={"first_name": "Ada", "email_address": email},
        headers=headers,
    )
    assert resp.status_code == 422
    assert resp.json()["title"] == "Validation Error"


async def test_create_settings_without_subdomain_creates_template(client: AsyncClient):
    headers, email = new_owner("set-new")
    data = await create_settings(client, headers, email, store_description="Hand made")

    assert data["store_name"] == "Acme"
    template = await _template(client, headers)
    assert template["store_subdomain"] is None
    assert template["settings_id"] == data["id"]
    assert template["header_part"] == {"title": "Acme", "description": "Hand made"}


async def test_second_settings_row_for_owner_conflicts(client: AsyncClient):
    headers, email = new_owner("set-dup")
    await create_settings(client, headers, email)

    resp = await client.post(
        "/api/v1/settings",
        json={
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email_address": f"other-{uuid.uuid4().hex[:8]}@example.com",
            "store_name": "Acme",
        },
        headers=headers,
    )
    assert resp.status_code == 409


async def test_duplicate_email_across_owners_conflicts(client: AsyncClient):
    headers_a, email_a = new_owner("set-ea")
    await create_settings(client, headers_a, email_a)

    headers_b, _email_b = new_owner("set-eb")
    resp = await client.post(
        "/api/v1/settings",
        json={
            "first_name": "Bob",
            "last_name": "B",
            "email_address": email_a,
            "store_name": "Bobs",
        },
        headers=headers_b,
    )
    assert resp.status_code == 409
    assert resp.json()["error"] == "Settings with this email already exists"


async def test_get_settings_is_owner_scoped(client: AsyncClient):
    headers_a, email_a = new_owner("set-ga")
    data = await create_settings(client, headers_a, email_a)

    resp = await client.get(f"/api/v1/settings/{data['id']}", headers=headers_a)
    assert resp.status_code == 200
    assert resp.json()["data"]["email_address"] == email_a

    headers_b, _email_b = new_owner("set-gb")
    resp = await client.get(f"/api/v1/settings/{data['id']}", headers=headers_b)
    assert resp.status_code == 404
    assert resp.json()["error"] == "Settings not found"


async def test_put_settings_writes_only_present_fields(client: AsyncClient):
    headers, email = new_owner("set-put")
    sub = unique_subdomain("put")
    data = await create_settings(client, headers, email, store_url=sub, phone_number="123")

    resp = await client.put(
        f"/api/v1/settings/{data['id']}",
        json={"first_name": "Grace"},
        headers=headers,
    )
    assert resp.status_code == 200
    updated = resp.json()["data"]
    assert updated["first_name"] == "Grace"
    assert updated["phone_number"] == "123"
    assert updated["store_url"] == sub

    template = await _template(client, headers)
    assert template["store_subdomain"] == sub


async def test_put_settings_blank_store_url_keeps_subdomain(client: AsyncClient):
    headers, email = new_owner("set-blank")
    sub = unique_subdomain("blank")
    data = await create_settings(client, headers, email, store_url=sub)

    resp = await client.put(
        f"/api/v1/settings/{data['id']}",
        json={"store_name": "Renamed", "store_url": ""},
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["store_url"] == sub

    template = await _template(client, headers)
    assert template["store_subdomain"] == sub
    assert template["store_name"] == "Renamed"


async def test_store_url_is_normalized_on_both_rows(client: AsyncClient):
    headers, email = new_owner("set-norm")
    sub = unique_subdomain("norm")
    data = await create_settings(client, headers, email, store_url=f"  {sub.upper()} ")
    assert data["store_url"] == sub

    template = await _template(client, headers)
    assert template["store_subdomain"] == sub

    resp = await client.put(
        "/api/v1/settings/store",
        json={"store_name": "Acme", "store_url": "   "},
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["store_url"] == sub
    template = await _template(client, headers)
    assert template["store_subdomain"] == sub


async def test_invalid_store_url_rolls_back_the_write(client: AsyncClient):
    headers, email = new_owner("set-bad")
    data = await create_settings(client, headers, email)

    resp = await client.put(
        f"/api/v1/settings/{data['id']}",
        json={"store_name": "Should Not Stick", "store_url": "Not A Slug!"},
        headers=headers,
    )
    assert resp.status_code == 422

    resp = await client.get(f"/api/v1/settings/{data['id']}", headers=headers)
    assert resp.json()["data"]["store_name"] == "Acme"


async def test_put_store_info_requires_settings(client: AsyncClient):
    headers, _email = new_owner("set-nostore")
    resp = await client.put(
        "/api/v1/settings/store", json={"store_name": "Acme"}, headers=headers
    )
    assert resp.status_code == 404
    assert "create settings first" in resp.json()["error"]


async def test_put_store_info_syncs_template(client: AsyncClient):
    headers, email = new_owner("set-store")
    await create_settings(client, headers, email)
    sub = unique_subdomain("info")

    resp = await client.put(
        "/api/v1/settings/store",
        json={"store_name": "Acme Deluxe", "store_description": "Better", "store_url": sub},
        headers=headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Store information updated successfully and synced with template"
    assert body["data"]["store_name"] == "Acme Deluxe"

    template = await _template(client, headers)
    assert template["store_subdomain"] == sub
    assert template["store_name"] == "Acme Deluxe"
    assert template["header_part"]["description"] == "Better"


async def test_put_store_info_rejects_empty_name(client: AsyncClient):
    headers, email = new_owner("set-noname")
    await create_settings(client, headers, email)
    resp = await client.put("/api/v1/settings/store", json={"store_name": ""}, headers=headers)
    assert resp.status_code == 422


async def test_store_url_taken_by_another_store_conflicts(client: AsyncClient):
    headers_a, email_a = new_owner("set-ta")
    sub = unique_subdomain("taken")
    await create_settings(client, headers_a, email_a, store_url=sub)

    headers_b, email_b = new_owner("set-tb")
    data = await create_settings(client, headers_b, email_b, store_name="Bee")

    resp = await client.put(
        f"/api/v1/settings/{data['id']}",
        json={"store_name": "Bee Two", "store_url": sub},
        headers=headers_b,
    )
    assert resp.status_code == 409

    # Nothing from the rejected request was written
    resp = await client.get(f"/api/v1/settings/{data['id']}", headers=headers_b)
    assert resp.json()["data"]["store_name"] == "Bee"
    template = await _template(client, headers_b)
    assert template["store_subdomain"] is None


async def test_delete_settings_unlinks_template(client: AsyncClient):
    headers, email = new_owner("set-del")
    data = await create_settings(client, headers, email)

    resp = await client.delete(f"/api/v1/settings/{data['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Settings deleted"

    resp = await client.get(f"/api/v1/settings/{data['id']}", headers=headers)
    assert resp.status_code == 404
    template = await _template(client, headers)
    assert template["settings_id"] is None
