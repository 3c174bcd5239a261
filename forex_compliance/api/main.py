"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from forex_compliance.api.middleware import RequestIDMiddleware, MetricsMiddleware
from forex_compliance.api.v1 import cities, lrs, orders, pricing, tds
from forex_compliance.infrastructure.observability.logging import setup_logging
from forex_compliance.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Forex Compliance Service",
        description="TDS, LRS limit, delivery eligibility and order status calculations",
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

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(tds.router, prefix="/v1", tags=["tds"])
    app.include_router(lrs.router, prefix="/v1", tags=["lrs"])
    app.include_router(cities.router, prefix="/v1", tags=["cities"])
    app.include_router(orders.router, prefix="/v1", tags=["orders"])
    app.include_router(pricing.router, prefix="/v1", tags=["pricing"])

    return app


app = create_app()
