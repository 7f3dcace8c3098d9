from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session
from app.models.user import User


def get(db: Session, user_id: UUID) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()
