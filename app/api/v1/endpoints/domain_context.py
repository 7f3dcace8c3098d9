"""Expose the custom domain annotation of the current request to the frontend."""
from typing import Any

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/domain-context")
def get_domain_context(request: Request) -> Any:
    if not getattr(request.state, "is_custom_domain", False):
        return {"mapped": False}
    return {
        "mapped": True,
        "domain": request.state.custom_domain,
        "portfolioId": request.state.custom_domain_portfolio_id,
    }
