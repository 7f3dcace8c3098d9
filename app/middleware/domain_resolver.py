"""
Domain Resolver Middleware

Resolves the inbound Host header to an active custom domain mapping and
annotates the request for downstream handlers:

    request.state.is_custom_domain
    request.state.custom_domain
    request.state.custom_domain_portfolio_id
    request.state.custom_domain_portfolio_type
    request.state.custom_domain_user
"""

import logging
from typing import Iterable, Optional

from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.logging_config import bind_custom_domain
from app.services.domain_registry import DomainRegistry
from app.services.hostnames import host_from_header, registry_key

logger = logging.getLogger("portfolio.domain")

_LOCAL_MARKERS = ("localhost", "127.0.0.1")


def annotate_not_custom(request: Request) -> None:
    request.state.is_custom_domain = False
    request.state.custom_domain = None
    request.state.custom_domain_portfolio_id = None
    request.state.custom_domain_portfolio_type = None
    request.state.custom_domain_user = None


class DomainResolverMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, registry: Optional[DomainRegistry] = None,
                 platform_hosts: Optional[Iterable[str]] = None):
        super().__init__(app)
        self._registry = registry
        hosts = settings.platform_hosts if platform_hosts is None else platform_hosts
        self.platform_hosts = frozenset(h.lower() for h in hosts)

    def registry_for(self, request: Request) -> DomainRegistry:
        return self._registry or request.app.state.domain_registry

    def is_platform_host(self, host: str) -> bool:
        return host in self.platform_hosts or any(m in host for m in _LOCAL_MARKERS)

    async def dispatch(self, request: Request, call_next) -> Response:
        annotate_not_custom(request)

        host = host_from_header(request.headers.get("host"))
        if not host or self.is_platform_host(host):
            return await call_next(request)

        # Registry errors propagate to the generic 500 handler
        mapping = await run_in_threadpool(self.registry_for(request).find_active_domain, registry_key(host))

        if mapping is not None and mapping.portfolio_id:
            owner = mapping.owner
            request.state.is_custom_domain = True
            request.state.custom_domain = host
            request.state.custom_domain_portfolio_id = mapping.portfolio_id
            request.state.custom_domain_portfolio_type = (owner.industry if owner else None) or "general"
            request.state.custom_domain_user = owner
            bind_custom_domain(host)
            logger.info(
                "Custom domain detected: %s → user %s",
                host, owner.id if owner else "-",
            )

        return await call_next(request)
