"""Hostname helpers shared by the resolver, the CORS policy and the domain API."""
import re
from typing import Optional, Tuple
from urllib.parse import urlsplit

_HOST_CHARS = re.compile(r"[^a-zA-Z0-9.:-]")
_DOMAIN_PATTERN = re.compile(r"^[a-z0-9][a-z0-9.-]*[a-z0-9]$")
_WWW_PREFIX = re.compile(r"^www\.")


def host_from_header(raw: Optional[str]) -> str:
    """Sanitize a Host header value and drop the port: ``Foo.com:8080`` → ``foo.com``."""
    if not raw:
        return ""
    cleaned = _HOST_CHARS.sub("", raw).lower()
    return cleaned.split(":")[0].rstrip(".")


def registry_key(hostname: str) -> str:
    """Key a hostname is stored under: registration drops a leading ``www.``."""
    return _WWW_PREFIX.sub("", hostname)


def normalize_domain(value: Optional[str]) -> Optional[str]:
    """Reduce user input such as ``https://www.Example.com:443/about`` to ``example.com``."""
    if not value or not isinstance(value, str):
        return None
    dom = value.strip().lower()
    dom = re.sub(r"^https?://", "", dom)
    dom = _WWW_PREFIX.sub("", dom)
    dom = re.sub(r"/.*$", "", dom)
    dom = re.sub(r":\d+$", "", dom)
    dom = dom.rstrip(".")
    return dom or None


def is_valid_domain(domain: str) -> bool:
    return (
        len(domain) <= 255
        and "." in domain
        and ".." not in domain
        and bool(_DOMAIN_PATTERN.match(domain))
    )


def parse_origin(origin: str) -> Tuple[str, str]:
    """
    Split an Origin header into ``(normalized_origin, hostname)``.

    Raises ValueError when the value has no scheme or no hostname.
    """
    parts = urlsplit(origin.strip())
    if not parts.scheme or not parts.hostname:
        raise ValueError(f"invalid origin: {origin!r}")
    return f"{parts.scheme}://{parts.netloc}".lower(), parts.hostname.lower()
