"""
Dynamic CORS Middleware

Starlette's CORSMiddleware only understands a fixed origin list. Origins here
are decided per request by CorsOriginPolicy (static allow-list + registered
custom domains), so the decision runs first and the standard middleware only
writes the headers for origins that passed.
"""

import logging
from typing import Optional

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from app.middleware.metrics import CORS_DECISIONS
from app.services.cors_policy import (
    CorsNotAllowedError,
    CorsOriginPolicy,
    CorsValidationError,
    InvalidOriginError,
)

logger = logging.getLogger("portfolio.cors")


class DynamicCORSMiddleware:
    def __init__(self, app: ASGIApp, policy: Optional[CorsOriginPolicy] = None):
        self.app = app
        self._policy = policy
        self.cors = CORSMiddleware(
            app,
            allow_origin_regex=r".*",
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def policy_for(self, scope: Scope) -> CorsOriginPolicy:
        return self._policy or scope["app"].state.cors_policy

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        origin = Headers(scope=scope).get("origin")
        if origin is None:
            await self.app(scope, receive, send)
            return

        try:
            await self.policy_for(scope).authorize(origin)
        except InvalidOriginError as e:
            CORS_DECISIONS.labels(decision="invalid").inc()
            response = JSONResponse(status_code=400, content={"detail": str(e)})
        except CorsNotAllowedError as e:
            CORS_DECISIONS.labels(decision="denied").inc()
            response = JSONResponse(status_code=403, content={"detail": str(e)})
        except CorsValidationError as e:
            CORS_DECISIONS.labels(decision="error").inc()
            response = JSONResponse(status_code=500, content={"detail": str(e)})
        else:
            CORS_DECISIONS.labels(decision="allowed").inc()
            await self.cors(scope, receive, send)
            return

        await response(scope, receive, send)
