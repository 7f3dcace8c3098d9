from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union

from jose import jwt

from app.config import settings

ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24


def create_access_token(subject: Union[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"exp": expire, "sub": str(subject)}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
