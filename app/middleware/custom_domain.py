"""
Custom Domain Handler Middleware

Runs after DomainResolverMiddleware. On a resolved custom domain, page
requests are answered with a description of the portfolio to render; API and
asset paths in SKIP_PATH_PREFIXES fall through to the regular routes.
"""

import logging
from typing import Any, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.middleware.metrics import CUSTOM_DOMAIN_RESPONSES

logger = logging.getLogger("portfolio.custom_domain")

# Matched as prefixes of the decoded path, never of the raw URL.
# /metrics and /routing-proxy are not listed: on a custom domain they get the
# portfolio payload and are served only on platform hosts.
SKIP_PATH_PREFIXES = (
    "/api/",
    "/auth/",
    "/uploads/",
    "/health",
    "/stripe-webhook",
    "/checkout",
    "/user/",
    "/settings/",
    "/drive/",
    "/photo/",
    "/upload/",
    "/testimonials/",
    "/dashboard/",
    "/banner/",
    "/about/",
    "/menu/",
    "/gallery/",
    "/reviews/",
    "/tagged/",
    "/vendor/",
    "/datascience-portfolio/",
    "/portfolio/",
    "/softwareeng/",
    "/cleaning/",
    "/services/",
    "/quotes/",
    "/rooms/",
    "/support-form/",
    "/subscriptions/",
)

PORTFOLIO_MESSAGE = "Custom domain detected - portfolio should be rendered"


def is_skipped_path(path: str) -> bool:
    """True when ``path`` must bypass the custom domain short-circuit."""
    path = path.split("?", 1)[0]
    return any(path.startswith(prefix) for prefix in SKIP_PATH_PREFIXES)


def build_portfolio_info(
    domain: Optional[str],
    portfolio_id: str,
    portfolio_type: Optional[str],
    user: Any,
) -> dict:
    """
    Payload describing the portfolio behind a custom domain.

    ``user`` must be set; a missing owner raises AttributeError.
    """
    return {
        "customDomain": True,
        "domain": domain,
        "portfolioId": portfolio_id,
        "portfolioType": portfolio_type,
        "user": {
            "id": user.id,
            "username": user.username,
            "firstName": user.first_name,
            "lastName": user.last_name,
            "industry": user.industry,
        },
        "message": PORTFOLIO_MESSAGE,
    }


class CustomDomainMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        state = request.state
        is_custom = getattr(state, "is_custom_domain", False)
        portfolio_id = getattr(state, "custom_domain_portfolio_id", None)

        if not is_custom or portfolio_id is None:
            return await call_next(request)

        if is_skipped_path(request.url.path):
            CUSTOM_DOMAIN_RESPONSES.labels(outcome="passthrough").inc()
            return await call_next(request)

        domain = getattr(state, "custom_domain", None)
        info = build_portfolio_info(
            domain,
            portfolio_id,
            getattr(state, "custom_domain_portfolio_type", None),
            getattr(state, "custom_domain_user", None),
        )

        logger.info("Custom domain handler: serving portfolio for %s", domain)
        CUSTOM_DOMAIN_RESPONSES.labels(outcome="portfolio").inc()

        return JSONResponse(status_code=200, content=info)
