"""
Application factory for FastAPI.

This module provides a factory function for creating FastAPI application instances.
The factory pattern allows for:
- Easy testing with custom settings
- Multiple app instances with different configurations
- Clear separation of app creation from route definitions

Usage:
    from backend.main import create_app
    from backend.settings import Settings

    # Default app (uses get_settings())
    app = create_app()

    # Test app with custom settings
    test_settings = Settings(environment="test", _env_file=None)
    test_app = create_app(settings=test_settings)
"""

import logging
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _init_sentry(settings)

    app = FastAPI(
        title="RepCompanion Analytics API",
        description="Training schedule, progress, statistics and health trend analytics",
        version="1.0.0",
    )

    _configure_cors(app, settings)
    _include_routers(app)
    _log_configuration(settings)

    return app


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
            profiles_sample_rate=0.1,
        )
        logger.info("Sentry initialized for analytics-api")


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware for the application."""
    trusted_origins = [
        "http://localhost:3000",
        "http://localhost:3001",
    ]
    trusted_origins.extend(settings.cors_origins_list)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=trusted_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        health_router,
        schedule_router,
        stats_router,
        analysis_router,
        health_metrics_router,
        sync_router,
    )

    # Health router (no prefix - /health at root)
    app.include_router(health_router)

    # Domain routers (with prefixes defined in each router)
    app.include_router(schedule_router)
    app.include_router(stats_router)
    app.include_router(analysis_router)
    app.include_router(health_metrics_router)
    app.include_router(sync_router)


def _log_configuration(settings: Settings) -> None:
    """Log the configuration that changes behavior at startup."""
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("Supabase credentials not configured; data endpoints will return 503")
    if not settings.api_keys_list:
        logger.warning("No API keys configured; all authenticated requests will be rejected")
    if settings.is_production and not settings.sentry_dsn:
        logger.warning("SENTRY_DSN not set in production; errors will not be reported")
    logger.info(
        f"Analytics defaults: timezone={settings.default_timezone}, "
        f"progression_days={settings.progression_default_days}, "
        f"trend_days={settings.trend_default_days}"
    )


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
