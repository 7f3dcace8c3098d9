"""Seed a demo portfolio owner with an active custom domain mapping."""
import logging
import sys

from app.db.session import SessionLocal
from app.crud import crud_domain, crud_user
from app.models.domain_rewrite import DomainStatus
from app.models.user import Industry, User
from app.schemas.domain import DomainCreate
from app.services.hostnames import normalize_domain

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEMO_USERNAME = "demo-handyman"


def seed(domain: str) -> None:
    db = SessionLocal()
    try:
        user = crud_user.get_by_username(db, DEMO_USERNAME)
        if not user:
            logger.info("Creating demo user %s", DEMO_USERNAME)
            user = User(
                username=DEMO_USERNAME,
                first_name="Demo",
                last_name="Handyman",
                industry=Industry.HANDYMAN.value,
            )
            db.add(user)
            db.commit()
            db.refresh(user)

        if crud_domain.get_by_domain(db, domain):
            logger.info("Domain %s already registered, nothing to do", domain)
            return

        portfolio_id = "ID-123"
        crud_domain.create(
            db,
            obj_in=DomainCreate(
                domain=domain,
                portfolio_id=portfolio_id,
                portfolio_path=f"/portfolios/handyman/{portfolio_id}",
            ),
            user_id=user.id,
            status=DomainStatus.ACTIVE,
        )
        logger.info("Mapped %s → portfolio %s", domain, portfolio_id)
    finally:
        db.close()


if __name__ == "__main__":
    target = normalize_domain(sys.argv[1] if len(sys.argv) > 1 else "demo-portfolio.test")
    if not target:
        sys.exit("usage: python -m scripts.seed_domains <domain>")
    seed(target)
