"""
Domain Rewrite Model

Maps a custom hostname to a portfolio and the internal path prefix that
renders it. Only ``active`` rows are honoured for routing and CORS.
"""
import enum
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Index, Uuid, func
from sqlalchemy.orm import relationship, validates
from app.db.base_class import Base


class DomainStatus(str, enum.Enum):
    ACTIVE = "active"
    PENDING = "pending"
    INACTIVE = "inactive"


class DomainRewrite(Base):
    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    domain = Column(String(255), unique=True, nullable=False)
    portfolio_id = Column(String(64), nullable=False)
    portfolio_path = Column(String(512), nullable=False)  # e.g. /portfolios/handyman/ID-123
    user_id = Column(Uuid, ForeignKey("user.id"), nullable=True, index=True)
    status = Column(String(16), nullable=False, default=DomainStatus.PENDING.value)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="domains")

    __table_args__ = (
        Index("ix_domainrewrite_domain_status", "domain", "status"),
    )

    @validates("domain")
    def _lowercase_domain(self, key, value):
        return value.strip().lower() if value else value

    @validates("status")
    def _check_status(self, key, value):
        # Raises ValueError for anything outside the lifecycle
        return DomainStatus(value).value
