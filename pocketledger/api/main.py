"""FastAPI application factory"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from pocketledger.api.middleware import RequestIDMiddleware, MetricsMiddleware
from pocketledger.api.v1 import borrowers, categories, contacts, loans, reports, transactions
from pocketledger.infrastructure.observability.logging import setup_logging
from pocketledger.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="PocketLedger",
        description="Personal finance and peer-to-peer loan tracking service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    prefix = settings.api_prefix
    app.include_router(contacts.router, prefix=prefix, tags=["contacts"])
    app.include_router(loans.router, prefix=prefix, tags=["loans"])
    app.include_router(borrowers.router, prefix=prefix, tags=["borrowers"])
    app.include_router(transactions.router, prefix=prefix, tags=["transactions"])
    app.include_router(categories.router, prefix=prefix, tags=["categories"])
    app.include_router(reports.router, prefix=prefix, tags=["reports"])

    return app


app = create_app()
