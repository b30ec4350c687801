"""Shared helpers for API tests."""

import uuid

from httpx import AsyncClient

from storefront.core.security import create_mock_access_token


def make_token(
    sub: str = "test-sub", email: str = "test@example.com", role: str | None = None
) -> str:
    """Generate a mock JWT for testing."""
    return create_mock_access_token(sub=sub, email=email, role=role)


def auth_headers(
    sub: str = "test-sub", email: str = "test@example.com", role: str | None = None
) -> dict:
    """Return Authorization headers with a mock JWT."""
    return {"Authorization": f"Bearer {make_token(sub=sub, email=email, role=role)}"}


def new_owner(prefix: str = "owner", role: str | None = None) -> tuple[dict, str]:
    """Headers and email for a fresh identity; the user row is provisioned on first call."""
    unique = uuid.uuid4().hex[:8]
    email = f"{prefix}-{unique}@example.com"
    return auth_headers(sub=f"{prefix}-sub-{unique}", email=email, role=role), email


def unique_subdomain(prefix: str = "shop") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


async def create_settings(
    client: AsyncClient, headers: dict, email: str, **fields
) -> dict:
    body = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email_address": email,
        "store_name": "Acme",
        **fields,
    }
    resp = await client.post("/api/v1/settings", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def publish_store(
    client: AsyncClient, headers: dict, subdomain: str, store_name: str = "Acme"
) -> dict:
    """Create (or update) the owner's template and publish it under ``subdomain``."""
    resp = await client.post(
        "/api/v1/store-templates", json={"store_name": store_name}, headers=headers
    )
    assert resp.status_code in (200, 201), resp.text
    resp = await client.put(
        "/api/v1/store-templates/publish",
        json={"store_subdomain": subdomain},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    return resp.json()
