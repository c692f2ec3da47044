"""
FastAPI application setup with dependency injection.
Exposes the healthy food search pipeline over HTTP.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from datetime import datetime, timezone
from contextlib import asynccontextmanager
from typing import Optional

from foodlocator.config import Settings, get_settings
from foodlocator.config.loader import load_config_for_environment
from foodlocator.core.dependencies import ServiceContainer
from foodlocator.core.error_handlers import setup_error_handlers, error_handler
from foodlocator.core.logging import configure_logging
from foodlocator.middleware import RequestContextMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management with service container.
    Startup builds the pipeline and runs the default search; shutdown releases it.
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    container: ServiceContainer = app.state.service_container
    try:
        await container.initialize_services()
        logger.info("Application startup complete")

        yield

    except Exception as e:
        logger.error(f"Application startup failed: {e}", exc_info=True)
        raise

    finally:
        logger.info("Shutting down application")
        await container.cleanup_services()
        logger.info("Application shutdown complete")


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()

    configure_logging(
        level=settings.log_level.value,
        json_format=settings.log_json,
        text_format=settings.log_format,
        log_file=settings.log_file,
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.service_container = container or ServiceContainer(settings)

    app.add_middleware(
        CORSMiddleware,
        **settings.get_cors_config()
    )
    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)

    from foodlocator.api import search_router, metrics_router
    app.include_router(search_router)
    app.include_router(metrics_router)

    @app.get("/")
    async def root():
        """Root endpoint for basic health check."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "status": "running"
        }

    @app.get("/health")
    async def health_check():
        """Health check with pipeline status."""
        service_container: ServiceContainer = app.state.service_container
        timestamp = datetime.now(timezone.utc).isoformat()

        if not service_container.initialized:
            return {
                "status": "unhealthy",
                "message": "Service container not initialized",
                "version": settings.app_version,
                "timestamp": timestamp,
            }

        state = service_container.get_orchestrator().state
        return {
            "status": "healthy" if settings.foursquare.api_key else "degraded",
            "version": settings.app_version,
            "timestamp": timestamp,
            "details": {
                "search": {"status": state.status.value, "query": state.query},
                "places_api_key_configured": bool(settings.foursquare.api_key),
            },
            "error_statistics": error_handler.get_error_statistics(),
        }

    return app


# Application instance for `uvicorn foodlocator.main:app`; ENVIRONMENT selects the .env.<environment> file
app = create_app(load_config_for_environment())
