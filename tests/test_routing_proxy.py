"""Routing proxy endpoint tests."""
import pytest
from httpx import AsyncClient

from app.api.v1.endpoints.routing_proxy import build_destination_path
from tests.conftest import create_mapping, create_user


@pytest.mark.asyncio
async def test_unconfigured_host_returns_404(client: AsyncClient, db):
    resp = await client.get("/routing-proxy", params={"host": "nobody.example.com", "path": "x"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Domain not configured", "domain": "nobody.example.com"}


@pytest.mark.asyncio
async def test_configured_host_resolves_destination(client: AsyncClient, db):
    create_mapping(db, "dannizhou.me", create_user(db), portfolio_id="ID-123",
                   portfolio_path="/portfolios/ID-123")

    resp = await client.get("/routing-proxy", params={"host": "dannizhou.me", "path": "gallery/photo1"})

    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "domain": "dannizhou.me",
        "destinationPath": "/portfolios/ID-123/gallery/photo1",
        "portfolioId": "ID-123",
        "originalPath": "gallery/photo1",
    }


@pytest.mark.asyncio
async def test_missing_path_defaults_to_empty(client: AsyncClient, db):
    create_mapping(db, "dannizhou.me", create_user(db), portfolio_path="/portfolios/ID-123")
    resp = await client.get("/routing-proxy", params={"host": "dannizhou.me"})
    assert resp.json()["destinationPath"] == "/portfolios/ID-123/"
    assert resp.json()["originalPath"] == ""


@pytest.mark.asyncio
async def test_pending_mapping_is_not_routed(client: AsyncClient, db):
    create_mapping(db, "dannizhou.me", create_user(db), status="pending")
    resp = await client.get("/routing-proxy", params={"host": "dannizhou.me"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_missing_host_returns_404(client: AsyncClient, db):
    resp = await client.get("/routing-proxy")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Domain not configured", "domain": None}


@pytest.mark.asyncio
async def test_registry_failure_returns_500(broken_registry_client: AsyncClient):
    resp = await broken_registry_client.get("/routing-proxy", params={"host": "dannizhou.me"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal routing error"}


def test_build_destination_path():
    assert build_destination_path("/portfolios/handyman/ID-1", "about") == "/portfolios/handyman/ID-1/about"
