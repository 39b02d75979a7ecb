"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from budget_forecaster.api.middleware import RequestIDMiddleware, SecurityHeadersMiddleware, MetricsMiddleware
from budget_forecaster.api.v1 import transactions, budgets, analysis, accuracy, system
from budget_forecaster.infrastructure.database.session import init_db
from budget_forecaster.infrastructure.observability.logging import setup_logging
from budget_forecaster.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def format_validation_errors(exc: RequestValidationError) -> list[str]:
    """Flatten pydantic errors into "field: message" strings"""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query"))
        messages.append(f"{field}: {error.get('msg')}" if field else error.get("msg", "Invalid input"))
    return messages


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Budget Forecaster",
        description="Spending forecast, backtest accuracy and budget recommendation service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"errors": format_validation_errors(exc)})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(transactions.router, prefix="/api", tags=["transactions"])
    app.include_router(budgets.router, prefix="/api", tags=["budgets"])
    app.include_router(analysis.router, prefix="/api", tags=["analysis"])
    app.include_router(accuracy.router, prefix="/api", tags=["accuracy"])
    app.include_router(system.router, prefix="/api", tags=["system"])

    return app


app = create_app()
