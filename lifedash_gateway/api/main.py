"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from lifedash_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from lifedash_gateway.api.v1 import finance, health, insights
from lifedash_gateway.infrastructure.observability.logging import setup_logging
from lifedash_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Life Dashboard Gateway",
        description="Spending categorization, financial and health scoring, and health-finance insights",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(finance.router, prefix="/v1", tags=["finance"])
    app.include_router(health.router, prefix="/v1", tags=["health"])
    app.include_router(insights.router, prefix="/v1", tags=["insights"])

    return app


app = create_app()
