"""
CORS Origin Policy

Decides per request origin whether cross-origin access is allowed:
  1. No Origin header           → allowed (same-origin / non-browser clients)
  2. Preview host or static list → allowed without touching the registry
  3. Anything else              → allowed only if an active custom domain exists

Registry failures fail closed.
"""

import logging
from typing import Iterable, Optional

from starlette.concurrency import run_in_threadpool

from app.services.domain_registry import DomainRegistry
from app.services.hostnames import parse_origin, registry_key

logger = logging.getLogger("portfolio.cors")

# Origins the platform frontends are served from
PLATFORM_ORIGINS = (
    "https://findvirtualme.com",
    "https://www.findvirtualme.com",
    "https://findvirtual.me",
    "https://www.findvirtual.me",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "https://localhost:5000",
)


class CorsError(Exception):
    """Base class for origin rejections."""


class InvalidOriginError(CorsError):
    def __init__(self, message: str = "Invalid origin"):
        super().__init__(message)


class CorsNotAllowedError(CorsError):
    def __init__(self, message: str = "Not allowed by CORS"):
        super().__init__(message)


class CorsValidationError(CorsError):
    def __init__(self, message: str = "CORS validation failed"):
        super().__init__(message)


class CorsOriginPolicy:
    def __init__(
        self,
        registry: DomainRegistry,
        static_origins: Iterable[str] = (),
        preview_suffixes: Iterable[str] = (),
    ):
        self.registry = registry
        self.preview_suffixes = tuple(s.lower() for s in preview_suffixes if s)
        self._static_origins: set[str] = set()
        self._static_hostnames: set[str] = set()
        for origin in static_origins:
            self._add_static(origin)

    def _add_static(self, origin: str) -> None:
        try:
            normalized, hostname = parse_origin(origin)
        except ValueError:
            logger.warning("Skipping invalid configured origin %r", origin)
            return
        self._static_origins.add(normalized)
        self._static_hostnames.add(hostname)
        if normalized.startswith("https://"):
            self._static_origins.add("http://" + normalized[len("https://"):])

    def is_static(self, normalized_origin: str, hostname: str) -> bool:
        if any(hostname.endswith(suffix) for suffix in self.preview_suffixes):
            return True
        return normalized_origin in self._static_origins or hostname in self._static_hostnames

    async def authorize(self, origin: Optional[str]) -> bool:
        """
        Return True when ``origin`` may access the API.

        Raises InvalidOriginError, CorsNotAllowedError or CorsValidationError
        when it may not.
        """
        if not origin:
            return True

        try:
            normalized, hostname = parse_origin(origin)
        except ValueError:
            raise InvalidOriginError()

        if self.is_static(normalized, hostname):
            return True

        try:
            match = await run_in_threadpool(self.registry.find_active_domain, registry_key(hostname))
        except Exception as e:
            logger.error("CORS registry lookup failed for %s: %s", hostname, e)
            raise CorsValidationError() from e

        if match is not None:
            return True

        logger.warning("CORS blocked: %s", origin)
        raise CorsNotAllowedError()
