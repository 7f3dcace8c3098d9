"""Pytest configuration and fixtures."""
import os

# Must be set before app.config is imported
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ.setdefault("APP_ENV", "test")

import uuid
from typing import Optional

import pytest
from httpx import AsyncClient, ASGITransport

from app.core.security import create_access_token
from app.db.session import SessionLocal, engine
from app.main import app as fastapi_app, create_app
from app.models import Base, DomainRewrite, User


# --- Fakes ---

class FakeRegistry:
    """In-memory DomainRegistry that records every lookup."""

    def __init__(self, mappings: Optional[dict] = None):
        self.mappings = mappings or {}
        self.calls: list[str] = []

    def find_active_domain(self, hostname):
        self.calls.append(hostname)
        return self.mappings.get(hostname)


class BrokenRegistry:
    def __init__(self):
        self.calls: list[str] = []

    def find_active_domain(self, hostname):
        self.calls.append(hostname)
        raise ConnectionError("registry unavailable")


# --- Per-test fixtures ---

@pytest.fixture
def db():
    """Fresh tables per test on the shared in-memory SQLite database."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
async def client(db):
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def broken_registry_client():
    """App whose registry always fails; served on a platform host so the resolver skips it."""
    broken_app = create_app(registry=BrokenRegistry())
    transport = ASGITransport(app=broken_app)
    async with AsyncClient(transport=transport, base_url="http://localhost") as ac:
        yield ac


# --- Helpers ---

def create_user(db, username: str = "johnsmith", industry: str = "project_manager") -> User:
    user = User(
        id=uuid.uuid4(),
        username=username,
        email=f"{username}@example.com",
        first_name=username.capitalize(),
        last_name="Smith",
        industry=industry,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_mapping(
    db,
    domain: str,
    user: Optional[User] = None,
    portfolio_id: str = "ID-123",
    portfolio_path: str = "/portfolios/ID-123",
    status: str = "active",
) -> DomainRewrite:
    record = DomainRewrite(
        domain=domain,
        portfolio_id=portfolio_id,
        portfolio_path=portfolio_path,
        user_id=user.id if user else None,
        status=status,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}
