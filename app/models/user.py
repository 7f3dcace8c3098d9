import uuid
from sqlalchemy import Column, String, DateTime, Uuid, func
from sqlalchemy.orm import relationship
import enum
from app.db.base_class import Base

class Industry(str, enum.Enum):
    HANDYMAN = "handyman"
    PHOTOGRAPHER = "photographer"
    DATA_SCIENTIST = "data_scientist"
    CLEANING_LADY = "cleaning_lady"
    PROJECT_MANAGER = "project_manager"
    SOFTWARE_ENGINEER = "software_engineer"

class User(Base):
    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    industry = Column(String, nullable=True)
    status = Column(String, default="active")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    domains = relationship("DomainRewrite", back_populates="user")

    @property
    def is_active(self):
        return self.status == "active"
