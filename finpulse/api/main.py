"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from finpulse.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finpulse.api.v1 import analyze, budgets, cash_flows, dashboard, transactions
from finpulse.infrastructure.database.models import Base
from finpulse.infrastructure.database.session import engine
from finpulse.infrastructure.observability.logging import setup_logging
from finpulse.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tables are created on first start; existing tables are left as they are
    Base.metadata.create_all(bind=engine)
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="finpulse",
        description="Financial records, dashboard aggregates and quick CSV analysis",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
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
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(cash_flows.router, prefix="/v1", tags=["cash-flows"])
    app.include_router(budgets.router, prefix="/v1", tags=["budgets"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(analyze.router, prefix="/v1", tags=["analysis"])

    return app


app = create_app()
