from app.db.base_class import Base
from app.models.user import User
from app.models.domain_rewrite import DomainRewrite, DomainStatus
