"""
Dependency injection setup for FastAPI.
Provides dependency providers for the search pipeline with lifecycle management.
"""

from fastapi import Depends, Request, HTTPException
from typing import Optional
import logging
import asyncio

import httpx

from foodlocator.config.settings import Settings, get_settings
from foodlocator.services import (
    GeocoderClient,
    PlacesClient,
    VenueEnricher,
    SearchOrchestrator,
)


logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for the search pipeline services.

    ``transport`` replaces the network for every outbound HTTP client; tests
    pass an ``httpx.MockTransport`` here.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport
        self._geocoder: Optional[GeocoderClient] = None
        self._places: Optional[PlacesClient] = None
        self._enricher: Optional[VenueEnricher] = None
        self._orchestrator: Optional[SearchOrchestrator] = None
        self._initialized = False
        self._initialization_lock = asyncio.Lock()

    async def initialize_services(self) -> None:
        """
        Build the pipeline and, when configured, run the startup search.
        """
        async with self._initialization_lock:
            if self._initialized:
                return

            logger.info("Initializing service container")

            self._geocoder = GeocoderClient(self.settings.geocoder, transport=self._transport)
            self._places = PlacesClient(self.settings.foursquare, transport=self._transport)
            self._enricher = VenueEnricher(self._places)
            self._orchestrator = SearchOrchestrator(
                geocoder=self._geocoder,
                places=self._places,
                enricher=self._enricher,
                settings=self.settings,
            )
            self._initialized = True

            if self.settings.search.search_on_startup:
                try:
                    await self._orchestrator.initialize()
                except Exception as e:
                    # The state already records the failure; the app still starts.
                    logger.error(f"Initial search failed: {e}", exc_info=True)

            logger.info("Service container initialization completed")

    async def cleanup_services(self) -> None:
        """Release service references."""
        logger.info("Cleaning up service container")
        self._orchestrator = None
        self._enricher = None
        self._places = None
        self._geocoder = None
        self._initialized = False
        logger.info("Service container cleanup completed")

    @property
    def initialized(self) -> bool:
        return self._initialized

    def get_orchestrator(self) -> SearchOrchestrator:
        """Get search orchestrator instance."""
        if not self._initialized or self._orchestrator is None:
            raise RuntimeError("Service container not initialized")
        return self._orchestrator


def get_service_container(request: Request) -> ServiceContainer:
    """
    Get the service container from application state.

    Raises:
        HTTPException: If service container is not available
    """
    container = getattr(request.app.state, 'service_container', None)
    if container is None:
        logger.error("Service container not initialized")
        raise HTTPException(
            status_code=500,
            detail="Service container not available"
        )
    return container


def get_orchestrator(
    container: ServiceContainer = Depends(get_service_container)
) -> SearchOrchestrator:
    """
    Dependency provider for SearchOrchestrator.

    Raises:
        HTTPException: If the orchestrator is not available
    """
    try:
        return container.get_orchestrator()
    except RuntimeError as e:
        logger.error(f"Search orchestrator not available: {e}")
        raise HTTPException(
            status_code=500,
            detail="Search orchestrator not available"
        )


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return getattr(request.app.state, "settings", None) or get_settings()
