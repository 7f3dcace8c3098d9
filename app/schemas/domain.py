from typing import Optional
from uuid import UUID
from datetime import datetime
from pydantic import BaseModel, Field

from app.models.domain_rewrite import DomainStatus


class PortfolioOwner(BaseModel):
    id: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    industry: Optional[str] = None


# Read model handed out by the domain registry (detached from any session)
class DomainMapping(BaseModel):
    domain: str
    portfolio_id: str
    portfolio_path: str
    user_id: Optional[UUID] = None
    status: DomainStatus = DomainStatus.ACTIVE
    created_at: Optional[datetime] = None
    owner: Optional[PortfolioOwner] = None


# Properties to receive via API on creation
class DomainCreate(BaseModel):
    domain: str = Field(max_length=255)
    portfolio_id: str = Field(min_length=1, max_length=64)
    portfolio_path: str = Field(max_length=512)


# Properties to receive via API on update
class DomainUpdate(BaseModel):
    status: DomainStatus


class DomainInfo(BaseModel):
    id: UUID
    domain: str
    portfolio_id: str
    portfolio_path: str
    status: DomainStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
