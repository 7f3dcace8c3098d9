from typing import Optional

from fastapi import FastAPI
from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.api.v1.api import api_router
from app.api.v1.endpoints import domain_context, routing_proxy
from app.db.session import SessionLocal, check_database
from app.middleware.cors import DynamicCORSMiddleware
from app.middleware.custom_domain import CustomDomainMiddleware
from app.middleware.domain_resolver import DomainResolverMiddleware
from app.middleware.metrics import PrometheusMiddleware, metrics_endpoint, set_app_info
from app.middleware.request_logging import RequestLoggingMiddleware
from app.logging_config import setup_logging
from app.services.cors_policy import PLATFORM_ORIGINS, CorsOriginPolicy
from app.services.domain_registry import DomainRegistry, SqlDomainRegistry


def create_app(registry: Optional[DomainRegistry] = None) -> FastAPI:
    application = FastAPI(
        title=settings.APP_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json"
    )

    # ── Domain registry shared by resolver, CORS policy and routing proxy ──
    application.state.domain_registry = registry or SqlDomainRegistry(SessionLocal)
    application.state.cors_policy = CorsOriginPolicy(
        application.state.domain_registry,
        static_origins=[*PLATFORM_ORIGINS, *settings.cors_origins],
        preview_suffixes=settings.cors_preview_suffixes,
    )

    # Middleware added last runs first:
    # logging → metrics → CORS → domain resolver → custom domain handler → routes
    application.add_middleware(CustomDomainMiddleware)
    application.add_middleware(DomainResolverMiddleware)
    application.add_middleware(DynamicCORSMiddleware)
    application.add_middleware(PrometheusMiddleware)
    application.add_middleware(RequestLoggingMiddleware)

    application.include_router(api_router, prefix=settings.API_V1_STR)
    application.include_router(domain_context.router, prefix="/api", tags=["domain-context"])
    application.include_router(routing_proxy.router, tags=["routing-proxy"])

    @application.get("/health")
    def health_check():
        return {"status": "ok", "env": settings.APP_ENV}

    @application.get("/api/health")
    async def api_health():
        db_ok = await run_in_threadpool(check_database)
        return {"status": "ok", "database": "connected" if db_ok else "disconnected"}

    application.add_route("/metrics", metrics_endpoint)
    return application


# ── Initialize structured logging ──
setup_logging()
set_app_info(version="1.0.0", env=settings.APP_ENV)

app = create_app()
