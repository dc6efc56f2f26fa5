"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from project_analytics.config import Settings, get_settings, settings as default_settings
from project_analytics.middleware.error_handler import ErrorHandlerMiddleware, app_exception_handler
from project_analytics.middleware.logging import LoggingMiddleware
from project_analytics.routers import analytics, health
from project_analytics.utils.exceptions import AppException


def configure_logging(log_level: str = "INFO"):
    """Configure structured logging."""
    logging.basicConfig(
        format="%(message)s",
        stream=None,
        level=getattr(logging, log_level),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    app_settings = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan management."""
        configure_logging(app_settings.log_level)
        logger = structlog.get_logger()

        logger.info(
            "Application starting up",
            app_name=app_settings.app_name,
            version=app_settings.version,
            environment=app_settings.environment,
            debug=app_settings.debug
        )

        yield

        logger.info("Application shutting down")

    app = FastAPI(
        title="Project Analytics API",
        version=app_settings.version,
        description="""
**Project Analytics API** - Budget forecasting and project risk analytics

## Features

- 📈 **Budget Forecasting**: Linear trend extrapolation with confidence bands
- 🔍 **Anomaly Detection**: Z-score screening of project expenses
- ⚠️ **Risk Scoring**: Composite risk from budget, schedule, team and priority
        """,
        debug=app_settings.debug,
        docs_url=app_settings.docs_url,
        redoc_url=None,
        openapi_url=app_settings.openapi_url,
        lifespan=lifespan
    )

    app.dependency_overrides[get_settings] = lambda: app_settings

    cors_origins = app_settings.get_cors_origins_list()
    if app_settings.debug and not cors_origins:
        cors_origins = [
            "http://localhost:3000",
            "http://127.0.0.1:3000"
        ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID", "X-Process-Time"]
    )

    # Custom middleware (order matters - last added is executed first)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    app.add_exception_handler(AppException, app_exception_handler)

    app.include_router(
        health.router,
        prefix=app_settings.api_prefix,
        tags=["health"]
    )

    app.include_router(
        analytics.router,
        prefix=f"{app_settings.api_prefix}/analytics",
        tags=["analytics"]
    )

    @app.get("/", include_in_schema=False)
    async def root():
        """Root endpoint."""
        return {
            "message": f"Welcome to {app_settings.app_name}",
            "version": app_settings.version,
            "docs_url": app_settings.docs_url,
            "health_check": f"{app_settings.api_prefix}/health"
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "project_analytics.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.debug,
        log_level=default_settings.log_level.lower()
    )
