"""
Places client - Foursquare Places v3 search and detail lookups.
"""

import logging
import httpx
from typing import Any, List, Optional

from foodlocator.config.settings import FoursquareSettings, get_settings
from foodlocator.core.exceptions import ServiceUnavailableError
from foodlocator.schemas.geo import Coordinates
from foodlocator.schemas.venue import (
    RATING_MAX,
    RATING_MIN,
    PhotoReference,
    VenueAddress,
    VenueCandidate,
    VenueDetail,
)

logger = logging.getLogger(__name__)

SEARCH_SERVICE = "places_search"
DETAIL_SERVICE = "place_detail"


def parse_candidate(item: dict) -> VenueCandidate:
    """Build a candidate from one entry of the search ``results`` list."""
    main = item["geocodes"]["main"]
    location = item.get("location") or {}
    return VenueCandidate(
        id=str(item["fsq_id"]),
        name=item.get("name") or "",
        coordinates=Coordinates(
            latitude=float(main["latitude"]),
            longitude=float(main["longitude"]),
        ),
        categories=[
            c["name"] for c in item.get("categories") or [] if c.get("name")
        ],
        location=VenueAddress(
            address=location.get("address"),
            locality=location.get("locality"),
            formatted_address=location.get("formatted_address"),
        ),
    )


def parse_detail(payload: dict) -> VenueDetail:
    """Build the photo/rating detail from a place detail response."""
    photos = [
        PhotoReference(
            id=photo.get("id"),
            prefix=photo["prefix"],
            suffix=photo["suffix"],
            width=photo.get("width"),
            height=photo.get("height"),
        )
        for photo in payload.get("photos") or []
        if photo.get("prefix") and photo.get("suffix")
    ]

    rating: Optional[float] = None
    raw_rating = payload.get("rating")
    if raw_rating is not None:
        try:
            value = float(raw_rating)
        except (TypeError, ValueError):
            value = None
        if value is not None and RATING_MIN <= value <= RATING_MAX:
            rating = value
        else:
            logger.warning(
                f"Discarding rating {raw_rating!r} outside {RATING_MIN}-{RATING_MAX}"
            )

    return VenueDetail(photos=photos, rating=rating)


class PlacesClient:
    """Client for the Foursquare Places API."""

    def __init__(
        self,
        settings: Optional[FoursquareSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings().foursquare
        self.api_url = self.settings.api_url.rstrip("/")
        self.api_key = self.settings.api_key
        self.timeout = self.settings.timeout_seconds
        self._transport = transport

        if not self.api_key:
            logger.warning(
                "Foursquare API key not configured. "
                "Set FOURSQUARE_API_KEY in .env file."
            )

    def _get_headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = self.api_key
        return headers

    async def _get_json(self, service: str, path: str, params: dict) -> Any:
        try:
            async with httpx.AsyncClient(
                headers=self._get_headers(),
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(f"{self.api_url}{path}", params=params)
        except httpx.TimeoutException as exc:
            raise ServiceUnavailableError(service, {"reason": "timeout"}) from exc
        except httpx.HTTPError as exc:
            raise ServiceUnavailableError(service, {"reason": str(exc)}) from exc

        if response.status_code in (401, 403):
            logger.error("Foursquare API authentication failed. Check API key.")
            raise ServiceUnavailableError(service, {"status_code": response.status_code})

        if response.status_code != 200:
            raise ServiceUnavailableError(service, {"status_code": response.status_code})

        try:
            return response.json()
        except ValueError as exc:
            raise ServiceUnavailableError(service, {"reason": "invalid json"}) from exc

    async def search_strict(
        self,
        coords: Coordinates,
        query: str,
        limit: int,
        radius_m: Optional[int] = None,
    ) -> List[VenueCandidate]:
        """
        Search for venues near ``coords``; first page only.

        Raises:
            ServiceUnavailableError: On transport, auth, status or payload failure
        """
        params: dict = {"ll": coords.as_ll(), "query": query, "limit": limit}
        if radius_m is not None:
            params["radius"] = radius_m

        data = await self._get_json(SEARCH_SERVICE, "/places/search", params)
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise ServiceUnavailableError(SEARCH_SERVICE, {"reason": "unexpected payload"})

        candidates: List[VenueCandidate] = []
        seen: set[str] = set()
        for item in results[:limit]:
            try:
                candidate = parse_candidate(item)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping malformed search result: {e}")
                continue
            if candidate.id in seen:
                logger.debug(f"Skipping duplicate venue id {candidate.id}")
                continue
            seen.add(candidate.id)
            candidates.append(candidate)
        return candidates

    async def search(
        self,
        coords: Coordinates,
        query: str,
        limit: int,
        radius_m: Optional[int] = None,
    ) -> List[VenueCandidate]:
        """
        Search for venues near ``coords``.

        A failed search returns an empty list, the same as an area with no matches.
        """
        try:
            candidates = await self.search_strict(coords, query, limit, radius_m)
        except ServiceUnavailableError as e:
            logger.warning(
                f"Places search failed, treating as no results: {e.details}",
                extra={"service_name": SEARCH_SERVICE},
            )
            return []

        logger.info(f"Found {len(candidates)} venues for '{query}' near {coords.as_ll()}")
        return candidates

    async def get_details(self, venue_id: str) -> VenueDetail:
        """
        Fetch photos and rating for one venue.

        Raises:
            ServiceUnavailableError: On transport, auth, status or payload failure
        """
        params = {"fields": self.settings.detail_fields}
        data = await self._get_json(DETAIL_SERVICE, f"/places/{venue_id}", params)
        if not isinstance(data, dict):
            raise ServiceUnavailableError(DETAIL_SERVICE, {"reason": "unexpected payload"})
        try:
            return parse_detail(data)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ServiceUnavailableError(DETAIL_SERVICE, {"reason": str(exc)}) from exc


_client: Optional[PlacesClient] = None


def get_places_client() -> PlacesClient:
    """Get the places client singleton."""
    global _client
    if _client is None:
        _client = PlacesClient()
    return _client
