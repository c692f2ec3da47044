"""
Search orchestrator - geocode, places search and enrichment as one search cycle.

The orchestrator is the only writer of the ``SearchState``. Each call to
``search`` starts a new cycle with a higher generation number; a cycle that
finds a newer generation after any await writes nothing further, so the
latest search always wins regardless of response timing.

State machine::

    idle/success/error --search("")--> error (LOCATION_REQUIRED)
    any --search(name)--> loading --geocode miss/outage--> error
                                  --no venues / search outage--> success (empty)
                                  --N venues, all enrichments settled--> success
"""

import logging
from typing import List, Optional

from foodlocator.config.settings import Settings, get_settings
from foodlocator.core.exceptions import (
    ErrorCode,
    FoodLocatorException,
    InputInvalidError,
)
from foodlocator.core.metrics import record_phase_latency, record_superseded_cycle
from foodlocator.schemas.geo import Coordinates
from foodlocator.schemas.search import SearchState, SearchStatus
from foodlocator.schemas.venue import EnrichedVenue
from foodlocator.services.geocoder_client import GeocoderClient, get_geocoder_client
from foodlocator.services.places_client import PlacesClient, get_places_client
from foodlocator.services.venue_enricher import VenueEnricher

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to fetch location or places."


class SearchOrchestrator:
    def __init__(
        self,
        geocoder: Optional[GeocoderClient] = None,
        places: Optional[PlacesClient] = None,
        enricher: Optional[VenueEnricher] = None,
        settings: Optional[Settings] = None,
    ):
        app_settings = settings or get_settings()
        self.search_settings = app_settings.search
        self.places_settings = app_settings.foursquare

        self.geocoder = geocoder or get_geocoder_client()
        self.places = places or get_places_client()
        self.enricher = enricher or VenueEnricher(self.places)

        self._state = SearchState()
        self._generation = 0

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _is_current(self, generation: int) -> bool:
        if generation == self._generation:
            return True
        logger.info(
            f"Discarding superseded search cycle {generation} (current {self._generation})",
            extra={"generation": generation},
        )
        record_superseded_cycle()
        return False

    def _transition(self, generation: int, **fields) -> bool:
        if not self._is_current(generation):
            return False
        self._state = SearchState(**fields)
        logger.debug(
            f"Search state -> {self._state.status.value}",
            extra={"generation": generation},
        )
        return True

    def _begin(self, generation: int, query: str) -> bool:
        # Previous results are cleared before any request is issued.
        return self._transition(generation, status=SearchStatus.LOADING, query=query)

    def _located(self, generation: int, query: str, coordinates: Coordinates) -> bool:
        return self._transition(
            generation,
            status=SearchStatus.LOADING,
            query=query,
            coordinates=coordinates,
        )

    def _fail(
        self,
        generation: int,
        query: Optional[str],
        message: str,
        error_code: ErrorCode,
    ) -> bool:
        return self._transition(
            generation,
            status=SearchStatus.ERROR,
            query=query,
            error=message,
            error_code=error_code.value,
        )

    def _succeed(
        self,
        generation: int,
        query: str,
        coordinates: Coordinates,
        venues: List[EnrichedVenue],
    ) -> bool:
        return self._transition(
            generation,
            status=SearchStatus.SUCCESS,
            query=query,
            coordinates=coordinates,
            venues=venues,
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def initialize(self) -> SearchState:
        """Run the implicit startup search against the default place name."""
        default = self.search_settings.default_place_name
        logger.info(f"Running initial search for '{default}'")
        return await self.search(default)

    async def search(self, place_name: str) -> SearchState:
        """
        Run one search cycle and return the state as it stands afterwards.

        Failures never raise for expected conditions: they are recorded in
        the state. If a newer search started meanwhile, the returned state
        is the newer cycle's (possibly still loading).
        """
        self._generation += 1
        generation = self._generation
        query = (place_name or "").strip()

        if not query:
            error = InputInvalidError()
            self._fail(generation, None, error.message, error.error_code)
            return self._state

        self._begin(generation, query)
        logger.info(f"Search started for '{query}'", extra={"generation": generation})

        try:
            try:
                with record_phase_latency("geocode"):
                    coordinates = await self.geocoder.resolve(query)
            except FoodLocatorException as e:
                logger.info(f"Geocoding failed for '{query}': {e.message}")
                self._fail(generation, query, e.message, e.error_code)
                return self._state

            if not self._located(generation, query, coordinates):
                return self._state

            with record_phase_latency("search"):
                candidates = await self.places.search(
                    coordinates,
                    self.places_settings.query,
                    self.places_settings.result_limit,
                    self.places_settings.radius_m,
                )
            if not self._is_current(generation):
                return self._state

            venues: List[EnrichedVenue] = []
            if candidates:
                with record_phase_latency("enrich"):
                    venues = await self.enricher.enrich_all(candidates)

            if self._succeed(generation, query, coordinates, venues):
                logger.info(
                    f"Search for '{query}' finished with {len(venues)} venues",
                    extra={"generation": generation},
                )
            return self._state

        except Exception:
            logger.error(f"Search for '{query}' failed unexpectedly", exc_info=True)
            self._fail(
                generation,
                query,
                GENERIC_FAILURE_MESSAGE,
                ErrorCode.INTERNAL_SERVER_ERROR,
            )
            raise
