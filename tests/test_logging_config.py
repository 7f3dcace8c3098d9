"""Unit tests for log formatting helpers."""
import json
import logging

import pytest
from httpx import AsyncClient

from app.logging_config import (
    HumanFormatter,
    JSONFormatter,
    RequestContextFilter,
    custom_domain_ctx,
    mask_pii,
    request_id_ctx,
)
from tests.conftest import create_mapping, create_user


def test_mask_pii_hides_email_and_secrets():
    masked = mask_pii('login john.smith@example.com token="abc123"')
    assert "john.smith@example.com" not in masked
    assert "j***h@example.com" in masked
    assert 'token="***"' in masked


def test_json_formatter_includes_request_context():
    rid = request_id_ctx.set("abcd1234")
    dom = custom_domain_ctx.set("johnsmith.com")
    try:
        record = logging.LogRecord("portfolio.test", logging.INFO, __file__, 1, "served %s", ("x",), None)
        entry = json.loads(JSONFormatter().format(record))
    finally:
        request_id_ctx.reset(rid)
        custom_domain_ctx.reset(dom)

    assert entry["message"] == "served x"
    assert entry["request_id"] == "abcd1234"
    assert entry["custom_domain"] == "johnsmith.com"
    assert "user_id" not in entry


def test_human_formatter_shows_custom_domain():
    dom = custom_domain_ctx.set("johnsmith.com")
    try:
        record = logging.LogRecord("portfolio.test", logging.INFO, __file__, 1, "hello", (), None)
        line = HumanFormatter().format(record)
    finally:
        custom_domain_ctx.reset(dom)

    assert "johnsmith.com" in line
    assert line.endswith("hello")


def test_context_filter_keeps_values_from_emit_time():
    record = logging.LogRecord("portfolio.test", logging.INFO, __file__, 1, "hello", (), None)
    dom = custom_domain_ctx.set("johnsmith.com")
    try:
        RequestContextFilter().filter(record)
    finally:
        custom_domain_ctx.reset(dom)

    entry = json.loads(JSONFormatter().format(record))
    assert entry["custom_domain"] == "johnsmith.com"


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []
        self.addFilter(RequestContextFilter())

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def request_log():
    log = logging.getLogger("portfolio.request")
    handler = _ListHandler()
    previous = log.level
    log.addHandler(handler)
    log.setLevel(logging.INFO)
    try:
        yield handler.records
    finally:
        log.removeHandler(handler)
        log.setLevel(previous)


@pytest.mark.asyncio
async def test_request_log_line_carries_custom_domain(client: AsyncClient, db, request_log):
    create_mapping(db, "johnsmith.com", create_user(db))

    resp = await client.get("/", headers={"host": "johnsmith.com"})

    assert resp.status_code == 200
    start, end = request_log[0], request_log[-1]
    assert start.getMessage().startswith("→ GET /")
    assert start.custom_domain == "-"
    assert end.getMessage().startswith("← GET / — 200")
    assert end.custom_domain == "johnsmith.com"
    assert end.request_id == resp.headers["x-request-id"]


@pytest.mark.asyncio
async def test_request_log_line_clears_domain_between_requests(client: AsyncClient, db, request_log):
    create_mapping(db, "johnsmith.com", create_user(db))

    await client.get("/", headers={"host": "johnsmith.com"})
    await client.get("/health", headers={"host": "findvirtual.me"})

    assert request_log[-1].custom_domain == "-"
