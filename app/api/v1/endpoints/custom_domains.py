"""
Custom Domain Management API

Allows a portfolio owner to:
  1. Register a custom domain for one of their portfolios (starts ``pending``)
  2. List their domain mappings
  3. Change a mapping's status (``pending`` → ``active`` once DNS is in place,
     ``inactive`` to take it offline)
  4. Delete a mapping

Plus a public lookup of active mappings by hostname.
"""
import logging
from typing import Any, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api import deps
from app.crud import crud_domain
from app.models.domain_rewrite import DomainRewrite
from app.models.user import User
from app.schemas.domain import DomainCreate, DomainInfo, DomainMapping, DomainUpdate
from app.services.domain_registry import DomainRegistry
from app.services.hostnames import is_valid_domain, normalize_domain

router = APIRouter()
logger = logging.getLogger("portfolio.custom_domain")


# ── Helpers ──

def _get_owned(db: Session, domain_id: UUID, user: User) -> DomainRewrite:
    record = crud_domain.get(db, domain_id)
    if not record:
        raise HTTPException(status_code=404, detail="Domain not found")
    if record.user_id != user.id:
        raise HTTPException(status_code=403, detail="You do not own this domain")
    return record


# ── Endpoints ──

@router.get("/", response_model=List[DomainInfo])
def list_domains(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    return crud_domain.get_multi_by_user(db, current_user.id)


@router.post("/", response_model=DomainInfo, status_code=201)
def add_domain(
    body: DomainCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    domain = normalize_domain(body.domain)
    if not domain or not is_valid_domain(domain):
        raise HTTPException(status_code=400, detail="Invalid domain format")
    if not body.portfolio_path.startswith("/"):
        raise HTTPException(status_code=400, detail="portfolio_path must start with '/'")

    if crud_domain.get_by_domain(db, domain):
        raise HTTPException(status_code=409, detail="Domain already mapped")

    obj_in = DomainCreate(
        domain=domain,
        portfolio_id=body.portfolio_id,
        portfolio_path=body.portfolio_path.rstrip("/"),
    )
    try:
        record = crud_domain.create(db, obj_in=obj_in, user_id=current_user.id)
    except IntegrityError:
        # Lost a race against a concurrent registration
        db.rollback()
        raise HTTPException(status_code=409, detail="Domain already mapped")

    logger.info("Custom domain added: %s for user %s", domain, current_user.id)
    return record


@router.patch("/{domain_id}", response_model=DomainInfo)
def update_domain_status(
    domain_id: UUID,
    body: DomainUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    record = _get_owned(db, domain_id, current_user)
    previous = record.status
    record = crud_domain.update_status(db, db_obj=record, status=body.status)
    logger.info("Custom domain %s: %s → %s", record.domain, previous, record.status)
    return record


@router.delete("/{domain_id}")
def delete_domain(
    domain_id: UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    record = _get_owned(db, domain_id, current_user)
    domain_name = record.domain
    crud_domain.remove(db, db_obj=record)

    logger.info("Custom domain deleted: %s", domain_name)
    return {"message": f"Domain {domain_name} deleted"}


@router.get("/lookup/{domain}", response_model=DomainMapping, response_model_exclude={"owner"})
def lookup_domain(
    domain: str,
    registry: DomainRegistry = Depends(deps.get_domain_registry),
) -> Any:
    """Public lookup of an active mapping by hostname."""
    hostname = normalize_domain(domain)
    mapping = registry.find_active_domain(hostname) if hostname else None
    if mapping is None:
        raise HTTPException(status_code=404, detail="Domain not configured")
    return mapping
