"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from classica.config import Settings, get_settings
from classica.infrastructure.database import close_db, init_db
from classica.infrastructure.middleware import (
    RequestContextMiddleware,
    register_error_handlers,
)
from classica.infrastructure.telemetry import configure_logging, get_logger, set_service_info
from classica.presentation.http import api_router
from classica.presentation.http.dependencies import get_llm_provider, get_tts_provider

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    logger.info(
        "Starting Classica backend",
        extra={
            "version": settings.version,
            "environment": settings.environment,
        },
    )

    await init_db(settings)
    logger.info("Database connection initialized")

    yield

    logger.info("Shutting down Classica backend")
    await get_llm_provider().close()
    await get_tts_provider().close()
    await close_db()
    logger.info("Database connection closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings override for testing

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    configure_logging(level=settings.log_level, format_type=settings.log_format)

    if settings.prometheus_enabled:
        set_service_info(version=settings.version, environment=settings.environment)

    app = FastAPI(
        title="Classica API",
        description="Conversational concierge and onboarding for classical music events",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
    )

    # Order matters: last added is first executed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if not settings.is_production else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    register_error_handlers(app)

    app.include_router(api_router)

    return app


# Default app instance for uvicorn
app = create_app()
