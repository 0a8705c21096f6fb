# tests/test_products_api.py
import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import ServerSettings
from app.main import app, create_app
from sdk.catalog import CatalogClient
from sdk.config import ClientConfig

client = TestClient(app)


def test_list_products_returns_fixed_catalog():
    r = client.get("/api/products")
    assert r.status_code == 200
    body = r.json()
    assert [p["name"] for p in body] == ["Laptop", "Headphones"]
    assert body[0] == {
        "id": 1,
        "name": "Laptop",
        "price": 1200.5,
        "stock": 25,
        "category": {"id": 101, "name": "Electronics"},
    }


def test_list_products_sets_cache_headers():
    r = client.get("/api/products")
    assert r.headers["cache-control"] == "public, max-age=300"


def test_cache_max_age_is_configurable():
    custom = TestClient(create_app(ServerSettings(cache_max_age_seconds=60)))
    r = custom.get("/api/products")
    assert r.headers["cache-control"] == "public, max-age=60"


def test_get_single_product():
    r = client.get("/api/products/2")
    assert r.status_code == 200
    assert r.json()["name"] == "Headphones"


def test_unknown_product_is_404():
    r = client.get("/api/products/999")
    assert r.status_code == 404
    assert r.json()["detail"] == "product not found"


def test_health():
    assert client.get("/health").json() == {"status": "ok"}


def test_cors_allows_configured_origin():
    restricted = TestClient(create_app(ServerSettings(cors_origins=["http://localhost:5173"])))
    r = restricted.get("/api/products", headers={"Origin": "http://localhost:5173"})
    assert r.headers["access-control-allow-origin"] == "http://localhost:5173"

    r = restricted.get("/api/products", headers={"Origin": "http://evil.test"})
    assert "access-control-allow-origin" not in r.headers


def test_gzip_when_body_is_large_enough():
    small_threshold = TestClient(create_app(ServerSettings(gzip_minimum_size=10)))
    r = small_threshold.get("/api/products", headers={"Accept-Encoding": "gzip"})
    assert r.headers["content-encoding"] == "gzip"
    assert r.json()[0]["id"] == 1


@pytest.mark.asyncio
async def test_catalog_client_against_backend():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport) as http:
        catalog = CatalogClient(ClientConfig(base_url="http://testserver"), http_client=http)

        first = await catalog.get_products()
        second = await catalog.get_products()

    assert first.ok
    assert [p.name for p in first.products] == ["Laptop", "Headphones"]
    assert first.products[1].category.name == "Accessories"
    assert second.from_cache
    assert second.products is first.products
