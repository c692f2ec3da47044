"""
Venue enricher - merges per-venue photos and rating into search candidates.

All detail lookups for one search run concurrently. A failed lookup only
affects its own venue, which is kept with empty photos and no rating.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from foodlocator.core.exceptions import PartialEnrichmentFailure, ServiceUnavailableError
from foodlocator.schemas.venue import EnrichedVenue, VenueCandidate
from foodlocator.services.places_client import PlacesClient, get_places_client

logger = logging.getLogger(__name__)


class VenueEnricher:
    def __init__(self, places_client: Optional[PlacesClient] = None):
        self.places = places_client or get_places_client()

    async def _fetch_detail(self, candidate: VenueCandidate):
        try:
            return await self.places.get_details(candidate.id)
        except ServiceUnavailableError as e:
            raise PartialEnrichmentFailure(candidate.id, reason=str(e.details)) from e

    async def enrich(self, candidate: VenueCandidate) -> EnrichedVenue:
        """Return ``candidate`` merged with its detail, or with defaults if the lookup fails."""
        try:
            detail = await self._fetch_detail(candidate)
        except PartialEnrichmentFailure as e:
            logger.warning(e.message, extra={"service_name": "place_detail"})
            return EnrichedVenue.from_parts(candidate)
        return EnrichedVenue.from_parts(candidate, detail)

    async def enrich_all(self, candidates: Sequence[VenueCandidate]) -> List[EnrichedVenue]:
        """
        Enrich every candidate concurrently and wait for all of them to settle.

        The result has one entry per candidate, in input order.
        """
        if not candidates:
            return []

        results = await asyncio.gather(
            *(self.enrich(candidate) for candidate in candidates),
            return_exceptions=True,
        )

        venues: List[EnrichedVenue] = []
        for candidate, result in zip(candidates, results):
            if isinstance(result, EnrichedVenue):
                venues.append(result)
            elif isinstance(result, Exception):
                logger.error(
                    f"Unexpected enrichment error for venue '{candidate.id}': {result}",
                    exc_info=result,
                )
                venues.append(EnrichedVenue.from_parts(candidate))
            else:
                # CancelledError and other BaseExceptions propagate
                raise result

        failed = sum(1 for v in venues if not v.enriched)
        if failed:
            logger.info(f"Enriched {len(venues) - failed}/{len(venues)} venues")
        return venues
