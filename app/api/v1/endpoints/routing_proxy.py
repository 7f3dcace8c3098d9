"""
Routing Proxy API

Resolves ``(host, path)`` on a custom domain to the internal portfolio path
that the frontend edge should render. Read-only; mappings are managed via
the domains API.
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api import deps
from app.services.domain_registry import DomainRegistry
from app.services.hostnames import registry_key

router = APIRouter()
logger = logging.getLogger("portfolio.routing_proxy")


def build_destination_path(portfolio_path: str, requested_path: str) -> str:
    return f"{portfolio_path}/{requested_path}"


@router.get("/routing-proxy")
def routing_proxy(
    host: Optional[str] = Query(None),
    path: str = Query(""),
    registry: DomainRegistry = Depends(deps.get_domain_registry),
) -> Any:
    try:
        mapping = registry.find_active_domain(registry_key(host.lower())) if host else None

        if mapping is None:
            return JSONResponse(
                status_code=404,
                content={"error": "Domain not configured", "domain": host},
            )

        return {
            "success": True,
            "domain": host,
            "destinationPath": build_destination_path(mapping.portfolio_path, path),
            "portfolioId": mapping.portfolio_id,
            "originalPath": path,
        }
    except Exception:
        logger.exception("Routing proxy error for host=%s path=%s", host, path)
        return JSONResponse(status_code=500, content={"error": "Internal routing error"})
