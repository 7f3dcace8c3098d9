"""Unit tests for hostname helpers."""
import pytest

from app.services.hostnames import (
    host_from_header,
    is_valid_domain,
    normalize_domain,
    parse_origin,
    registry_key,
)


@pytest.mark.parametrize("raw,expected", [
    ("JohnSmith.com", "johnsmith.com"),
    ("johnsmith.com:8080", "johnsmith.com"),
    ("johnsmith.com.", "johnsmith.com"),
    ("JohnSmith.com.:443", "johnsmith.com"),
    ("john<script>smith.com", "johnscriptsmith.com"),
    ("", ""),
    (None, ""),
])
def test_host_from_header(raw, expected):
    assert host_from_header(raw) == expected


@pytest.mark.parametrize("raw,expected", [
    ("https://www.Example.com:443/about", "example.com"),
    ("example.com.", "example.com"),
    ("  Sub.Example.org  ", "sub.example.org"),
    ("", None),
    (None, None),
])
def test_normalize_domain(raw, expected):
    assert normalize_domain(raw) == expected


def test_is_valid_domain():
    assert is_valid_domain("johnsmith.com")
    assert not is_valid_domain("localhost")
    assert not is_valid_domain("-bad.com")
    assert not is_valid_domain("a..b.com")


def test_parse_origin():
    assert parse_origin("https://Client.Example.net") == ("https://client.example.net", "client.example.net")
    assert parse_origin("http://localhost:5173") == ("http://localhost:5173", "localhost")
    with pytest.raises(ValueError):
        parse_origin("client.example.net")


def test_registry_key_drops_leading_www_only():
    assert registry_key("www.johnsmith.com") == "johnsmith.com"
    assert registry_key("johnsmith.com") == "johnsmith.com"
    assert registry_key("shop.www.johnsmith.com") == "shop.www.johnsmith.com"
