"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from budget_gateway.api.errors import register_exception_handlers
from budget_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from budget_gateway.api.v1 import (
    activity,
    assistant,
    bills,
    calendar,
    categories,
    dashboard,
    goals,
    incomes,
    notifications,
    transactions,
    users,
)
from budget_gateway.infrastructure.observability.logging import setup_logging
from budget_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Household Budget Gateway",
        description="Bills, incomes, categories, goals and monthly dashboard service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(users.router, prefix="/v1", tags=["users"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(bills.router, prefix="/v1", tags=["bills"])
    app.include_router(incomes.router, prefix="/v1", tags=["incomes"])
    app.include_router(categories.router, prefix="/v1", tags=["categories"])
    app.include_router(calendar.router, prefix="/v1", tags=["calendar"])
    app.include_router(activity.router, prefix="/v1", tags=["activity"])
    app.include_router(goals.router, prefix="/v1", tags=["goals"])
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(notifications.router, prefix="/v1", tags=["notifications"])
    app.include_router(assistant.router, prefix="/v1", tags=["assistant"])

    return app


app = create_app()
