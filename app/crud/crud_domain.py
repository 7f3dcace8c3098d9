from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session, joinedload
from app.models.domain_rewrite import DomainRewrite, DomainStatus
from app.schemas.domain import DomainCreate


def get(db: Session, domain_id: UUID) -> Optional[DomainRewrite]:
    return db.query(DomainRewrite).filter(DomainRewrite.id == domain_id).first()


def get_by_domain(db: Session, domain: str) -> Optional[DomainRewrite]:
    return db.query(DomainRewrite).filter(DomainRewrite.domain == domain.lower()).first()


def get_active_by_domain(db: Session, domain: str) -> Optional[DomainRewrite]:
    return (
        db.query(DomainRewrite)
        .options(joinedload(DomainRewrite.user))
        .filter(
            DomainRewrite.domain == domain.lower(),
            DomainRewrite.status == DomainStatus.ACTIVE.value,
        )
        .first()
    )


def get_multi_by_user(db: Session, user_id: UUID) -> List[DomainRewrite]:
    return (
        db.query(DomainRewrite)
        .filter(DomainRewrite.user_id == user_id)
        .order_by(DomainRewrite.created_at.desc())
        .all()
    )


def create(db: Session, *, obj_in: DomainCreate, user_id: Optional[UUID] = None,
           status: DomainStatus = DomainStatus.PENDING) -> DomainRewrite:
    db_obj = DomainRewrite(
        domain=obj_in.domain,
        portfolio_id=obj_in.portfolio_id,
        portfolio_path=obj_in.portfolio_path,
        user_id=user_id,
        status=status.value,
    )
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def update_status(db: Session, *, db_obj: DomainRewrite, status: DomainStatus) -> DomainRewrite:
    db_obj.status = status.value
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj


def remove(db: Session, *, db_obj: DomainRewrite) -> None:
    db.delete(db_obj)
    db.commit()
