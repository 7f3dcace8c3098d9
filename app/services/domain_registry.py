"""
Domain Registry

Read-only view over the ``domainrewrite`` table consumed by the domain
resolver, the CORS origin policy and the routing proxy. Each component gets
the registry injected instead of querying the database on its own.
"""

import logging
from typing import Callable, Optional, Protocol

from sqlalchemy.orm import Session

from app.crud import crud_domain
from app.models.domain_rewrite import DomainRewrite
from app.schemas.domain import DomainMapping, PortfolioOwner

logger = logging.getLogger("portfolio.registry")


class DomainRegistry(Protocol):
    def find_active_domain(self, hostname: str) -> Optional[DomainMapping]:
        """Return the active mapping for ``hostname`` or None."""
        ...


def to_mapping(record: DomainRewrite) -> DomainMapping:
    owner = None
    if record.user is not None:
        owner = PortfolioOwner(
            id=str(record.user.id),
            username=record.user.username,
            first_name=record.user.first_name,
            last_name=record.user.last_name,
            industry=record.user.industry,
        )
    return DomainMapping(
        domain=record.domain,
        portfolio_id=record.portfolio_id,
        portfolio_path=record.portfolio_path,
        user_id=record.user_id,
        status=record.status,
        created_at=record.created_at,
        owner=owner,
    )


class SqlDomainRegistry:
    """Registry backed by SQLAlchemy; one short-lived session per lookup."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_active_domain(self, hostname: str) -> Optional[DomainMapping]:
        db = self._session_factory()
        try:
            record = crud_domain.get_active_by_domain(db, hostname)
            if record is None:
                logger.debug("No active domain mapping for %s", hostname)
                return None
            return to_mapping(record)
        finally:
            db.close()
