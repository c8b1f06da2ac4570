"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from boleto_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from boleto_gateway.api.v1 import webhook
from boleto_gateway.api.v2 import webhook as webhook_v2
from boleto_gateway.infrastructure.observability.logging import setup_logging
from boleto_gateway.services.dispatch import DispatchScheduler
from boleto_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Let in-flight notifications finish before the loop goes away
    await app.state.dispatch_scheduler.drain()


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Boleto Gateway",
        description="Boleto resolution for chat integrations",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.dispatch_scheduler = DispatchScheduler()

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
    app.include_router(webhook.router, prefix="/api/v1", tags=["webhook"])
    app.include_router(webhook_v2.router, prefix="/api/v2", tags=["webhook"])

    return app


app = create_app()
