"""FastAPI application factory"""

from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from debt_gateway.api.errors import register_exception_handlers
from debt_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from debt_gateway.api.routes import accounts, debts, users
from debt_gateway.domain.store import RecordStore
from debt_gateway.infrastructure.observability.logging import setup_logging
from debt_gateway.infrastructure.store.factory import build_record_store
from debt_gateway.config import Settings, settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


def create_app(store: Optional[RecordStore] = None, app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    ``store`` overrides the configured record store (tests, embedding).
    Without it the store is built from settings, and a missing DATABASE_URL
    or fixture file aborts startup with ConfigurationError.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Debt Gateway",
        description="Debt candidate listing and stage transition service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.record_store = store or build_record_store(app_settings)

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "service": app_settings.service_name,
            "store_backend": app.state.record_store.backend,
        }

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(debts.router, tags=["debts"])
    app.include_router(accounts.router, tags=["accounts"])
    app.include_router(users.router, tags=["users"])

    return app


app = create_app()
