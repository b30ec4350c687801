"""Tenant host extraction and host-based routing tests."""

import pytest
from httpx import AsyncClient

from storefront.core.config import settings
from storefront.services.tenant_host import extract_subdomain, is_local_host
from tests.helpers import new_owner, publish_store, unique_subdomain


@pytest.mark.parametrize(
    "host,expected",
    [
        ("acme.loukify.website", "acme"),
        ("ACME.Loukify.Website:443", "acme"),
        ("acme.loukify.website.", "acme"),
        ("www.loukify.website", None),
        ("loukify.loukify.website", None),
        ("loukify.website", None),
        ("localhost", None),
        ("localhost:3000", None),
        ("127.0.0.1:8000", None),
        ("0.0.0.0", None),
        ("192.168.1.20:8000", None),
        ("[::1]:8000", None),
        ("shop.localhost:3000", None),
        ("my-app-git-main.vercel.app", None),
        ("acme.otherhost.com", "acme"),
        ("api.otherhost.com", None),
        ("admin.otherhost.com", None),
        ("www.otherhost.com", None),
        ("acme_shop.otherhost.com", None),
        ("otherhost.com", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_subdomain(host, expected):
    assert extract_subdomain(host) == expected


@pytest.mark.parametrize(
    "host,path,expected",
    [
        ("localhost:3000", "/store/acme", "acme"),
        ("127.0.0.1", "/store/Acme/products", "acme"),
        ("beta.loukify.website", "/store/acme", "acme"),
        (None, "/store/acme", "acme"),
        ("localhost", "/store/bad_label", None),
        ("localhost", "/store", None),
        ("acme.loukify.website", "/products", "acme"),
    ],
)
def test_store_path_names_tenant_on_any_host(host, path, expected):
    assert extract_subdomain(host, path) == expected


def test_dev_hosts_are_local(monkeypatch):
    monkeypatch.setattr(settings, "DEV_HOSTS", "box.dev.internal, 10.0.0.5")
    assert is_local_host("box.dev.internal:8080")
    assert extract_subdomain("box.dev.internal") is None
    assert extract_subdomain("10.0.0.5") is None


def test_preview_suffixes_are_configurable(monkeypatch):
    monkeypatch.setattr(settings, "PREVIEW_HOST_SUFFIXES", ".vercel.app,.netlify.app")
    assert extract_subdomain("acme.shop.netlify.app") is None


@pytest.mark.api
async def test_tenant_host_serves_published_store(client: AsyncClient):
    headers, _email = new_owner("host")
    sub = unique_subdomain("host")
    await publish_store(client, headers, sub, store_name="Host Shop")

    resp = await client.get("/", headers={"Host": f"{sub}.loukify.website"})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["store_subdomain"] == sub
    assert data["store_name"] == "Host Shop"

    # /store on a tenant host resolves from the Host header
    resp = await client.get("/store", headers={"Host": f"{sub}.loukify.website"})
    assert resp.status_code == 200
    assert resp.json()["data"]["store_subdomain"] == sub


@pytest.mark.api
async def test_tenant_host_products_path_is_rewritten(client: AsyncClient):
    headers, _email = new_owner("hostp")
    sub = unique_subdomain("hostp")
    await publish_store(client, headers, sub)

    resp = await client.get("/products", headers={"Host": f"{sub}.loukify.website"})
    assert resp.status_code == 200
    assert resp.json()["data"]["items"] == []


@pytest.mark.api
async def test_unknown_tenant_host_is_store_not_found(client: AsyncClient):
    resp = await client.get("/", headers={"Host": f"{unique_subdomain('nope')}.loukify.website"})
    assert resp.status_code == 404
    assert resp.json()["error"] == "Store not found"


@pytest.mark.api
async def test_api_paths_pass_through_on_tenant_host(client: AsyncClient):
    resp = await client.get("/api/v1/health", headers={"Host": "acme.loukify.website"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.api
async def test_store_on_bare_host_is_not_found(client: AsyncClient):
    resp = await client.get("/store")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Store not found"
