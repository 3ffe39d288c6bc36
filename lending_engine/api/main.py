"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from lending_engine.api.middleware import RequestIDMiddleware, MetricsMiddleware
from lending_engine.api.v1 import credit, loans, repayments, reports
from lending_engine.infrastructure.observability.logging import setup_logging
from lending_engine.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Lending Engine",
        description="Credit scoring and repayment schedule service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(credit.router, prefix="/v1", tags=["credit"])
    app.include_router(loans.router, prefix="/v1", tags=["loans"])
    app.include_router(repayments.router, prefix="/v1", tags=["repayments"])
    app.include_router(reports.router, prefix="/v1", tags=["reports"])

    return app


app = create_app()
