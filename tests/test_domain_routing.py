"""
Custom domain request flow
測試 Host → domain registry → portfolio payload 的完整流程
"""
import pytest
from httpx import AsyncClient

from tests.conftest import create_mapping, create_user


@pytest.mark.asyncio
async def test_custom_domain_root_serves_portfolio(client: AsyncClient, db):
    user = create_user(db, "johnsmith", industry="handyman")
    create_mapping(db, "johnsmith.com", user, portfolio_id="ID-123")

    resp = await client.get("/", headers={"host": "johnsmith.com"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["customDomain"] is True
    assert body["domain"] == "johnsmith.com"
    assert body["portfolioId"] == "ID-123"
    assert body["portfolioType"] == "handyman"
    assert body["user"] == {
        "id": str(user.id),
        "username": "johnsmith",
        "firstName": "Johnsmith",
        "lastName": "Smith",
        "industry": "handyman",
    }


@pytest.mark.asyncio
async def test_query_string_still_serves_portfolio(client: AsyncClient, db):
    create_mapping(db, "johnsmith.com", create_user(db))
    resp = await client.get("/?page=1", headers={"host": "JohnSmith.com:443"})
    assert resp.status_code == 200
    assert resp.json()["domain"] == "johnsmith.com"


@pytest.mark.asyncio
async def test_skip_listed_path_reaches_routes(client: AsyncClient, db):
    create_mapping(db, "johnsmith.com", create_user(db))
    resp = await client.get("/health", headers={"host": "johnsmith.com"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_domain_context_reports_mapping(client: AsyncClient, db):
    create_mapping(db, "johnsmith.com", create_user(db), portfolio_id="ID-9")
    resp = await client.get("/api/domain-context", headers={"host": "johnsmith.com"})
    assert resp.json() == {"mapped": True, "domain": "johnsmith.com", "portfolioId": "ID-9"}


@pytest.mark.asyncio
@pytest.mark.parametrize("host", ["findvirtual.me", "www.findvirtualme.com", "localhost:8000", "unknown.example.net"])
async def test_non_custom_hosts_are_not_mapped(client: AsyncClient, db, host):
    resp = await client.get("/api/domain-context", headers={"host": host})
    assert resp.json() == {"mapped": False}


@pytest.mark.asyncio
@pytest.mark.parametrize("status", ["pending", "inactive"])
async def test_only_active_mappings_are_honoured(client: AsyncClient, db, status):
    create_mapping(db, "johnsmith.com", create_user(db), status=status)
    resp = await client.get("/api/domain-context", headers={"host": "johnsmith.com"})
    assert resp.json() == {"mapped": False}


@pytest.mark.asyncio
async def test_mapping_without_owner_uses_general_type_and_fails_on_serve(client: AsyncClient, db):
    create_mapping(db, "orphan.example.com", user=None)

    ctx = await client.get("/api/domain-context", headers={"host": "orphan.example.com"})
    assert ctx.json()["mapped"] is True

    with pytest.raises(Exception):
        await client.get("/", headers={"host": "orphan.example.com"})


@pytest.mark.asyncio
async def test_trailing_dot_host_serves_portfolio(client: AsyncClient, db):
    create_mapping(db, "johnsmith.com", create_user(db))
    resp = await client.get("/", headers={"host": "johnsmith.com."})
    assert resp.status_code == 200
    assert resp.json()["domain"] == "johnsmith.com"


@pytest.mark.asyncio
async def test_metrics_on_custom_domain_serves_portfolio(client: AsyncClient, db):
    create_mapping(db, "johnsmith.com", create_user(db))
    resp = await client.get("/metrics", headers={"host": "johnsmith.com"})
    assert resp.json()["customDomain"] is True
