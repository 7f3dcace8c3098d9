"""
Logging for the domain router.

Each record is stamped with the request id, the custom domain the request
arrived on and the caller's user id. Production and staging write one JSON
object per line; development writes a single readable line.
"""

import json
import logging
import re
import sys
import uuid
from contextvars import ContextVar
from typing import Any

from app.config import settings

request_id_ctx: ContextVar[str] = ContextVar("request_id", default="-")
custom_domain_ctx: ContextVar[str] = ContextVar("custom_domain", default="-")
user_id_ctx: ContextVar[str] = ContextVar("user_id", default="-")

_CONTEXT_FIELDS = (
    ("request_id", request_id_ctx),
    ("custom_domain", custom_domain_ctx),
    ("user_id", user_id_ctx),
)


def generate_request_id() -> str:
    return uuid.uuid4().hex[:12]


def bind_custom_domain(domain: Any) -> None:
    """Record the custom domain a request was served on, or clear it."""
    custom_domain_ctx.set(domain or "-")


# Owner emails show up in registration and lookup messages
_EMAIL_PATTERN = re.compile(r'([a-zA-Z0-9._%+-]+)@([a-zA-Z0-9.-]+\.[a-zA-Z]{2,})')
_SECRET_PATTERN = re.compile(r'("?(?:password|token|secret|authorization)"?\s*[:=]\s*)"[^"]*"', re.I)


def _mask_email(match: re.Match) -> str:
    local, domain = match.group(1), match.group(2)
    if len(local) <= 2:
        return f"{local[0]}***@{domain}"
    return f"{local[0]}***{local[-1]}@{domain}"


def mask_pii(text: str) -> str:
    text = _SECRET_PATTERN.sub(r'\1"***"', text)
    return _EMAIL_PATTERN.sub(_mask_email, text)


class RequestContextFilter(logging.Filter):
    """Copy the request context onto the record when it is emitted."""

    def filter(self, record: logging.LogRecord) -> bool:
        for name, var in _CONTEXT_FIELDS:
            if not hasattr(record, name):
                setattr(record, name, var.get())
        return True


def _stamp(record: logging.LogRecord) -> None:
    RequestContextFilter().filter(record)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        _stamp(record)
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S.000Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": mask_pii(record.getMessage()),
        }
        for name, _ in _CONTEXT_FIELDS:
            value = getattr(record, name)
            if value and value != "-":
                entry[name] = value

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class HumanFormatter(logging.Formatter):
    FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-22s | [%(request_id)s %(custom_domain)s] %(message)s"

    def __init__(self, fmt: str = FORMAT, datefmt: str = "%H:%M:%S"):
        super().__init__(fmt, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        _stamp(record)
        return mask_pii(super().format(record))


def setup_logging() -> None:
    root = logging.getLogger()
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    if settings.is_production or settings.is_staging:
        handler.setFormatter(JSONFormatter())
        root.setLevel(logging.INFO)
    else:
        handler.setFormatter(HumanFormatter())
        root.setLevel(logging.DEBUG)

    root.addHandler(handler)

    for name in ("uvicorn.access", "httpcore", "httpx", "asyncio", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(logging.WARNING)
