"""
Geocoder client - resolves free-text place names with OpenStreetMap Nominatim.
"""

import logging
import httpx
from typing import Optional

from foodlocator.config.settings import GeocoderSettings, get_settings
from foodlocator.core.exceptions import LocationNotFoundError, ServiceUnavailableError
from foodlocator.schemas.geo import Coordinates

logger = logging.getLogger(__name__)

SERVICE_NAME = "geocoder"


class GeocoderClient:
    """Forward geocoding against the Nominatim ``/search`` endpoint."""

    def __init__(
        self,
        settings: Optional[GeocoderSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings().geocoder
        self.base_url = self.settings.base_url.rstrip("/")
        self.timeout = self.settings.timeout_seconds
        self._transport = transport

    def _get_headers(self) -> dict:
        headers = {
            "User-Agent": self.settings.user_agent,
            "Accept": "application/json",
        }
        if self.settings.referer:
            headers["Referer"] = self.settings.referer
        return headers

    async def resolve(self, place_name: str) -> Coordinates:
        """
        Resolve a place name to coordinates.

        Only the first match is used; there is no disambiguation.

        Args:
            place_name: Free-text place name (e.g., "Bandung, Indonesia")

        Returns:
            Coordinates of the first match

        Raises:
            LocationNotFoundError: The service returned zero matches
            ServiceUnavailableError: Transport error, timeout, bad status or bad payload
        """
        params = {"format": "json", "q": place_name, "limit": 1}

        try:
            async with httpx.AsyncClient(
                headers=self._get_headers(),
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(f"{self.base_url}/search", params=params)
        except httpx.TimeoutException as exc:
            logger.warning(f"Timeout geocoding '{place_name}'")
            raise ServiceUnavailableError(SERVICE_NAME, {"reason": "timeout"}) from exc
        except httpx.HTTPError as exc:
            logger.warning(f"Geocoding transport error for '{place_name}': {exc}")
            raise ServiceUnavailableError(SERVICE_NAME, {"reason": str(exc)}) from exc

        if response.status_code != 200:
            logger.warning(
                f"Nominatim returned {response.status_code} for '{place_name}'"
            )
            raise ServiceUnavailableError(
                SERVICE_NAME, {"status_code": response.status_code}
            )

        try:
            matches = response.json()
        except ValueError as exc:
            logger.warning(f"Nominatim returned a non-JSON body for '{place_name}'")
            raise ServiceUnavailableError(SERVICE_NAME, {"reason": "invalid json"}) from exc

        if not isinstance(matches, list):
            raise ServiceUnavailableError(SERVICE_NAME, {"reason": "unexpected payload"})

        if not matches:
            logger.info(f"No geocoding match for '{place_name}'")
            raise LocationNotFoundError(place_name)

        first = matches[0]
        try:
            coordinates = Coordinates(
                latitude=float(first["lat"]),
                longitude=float(first["lon"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(f"Unparseable geocoding match for '{place_name}': {first!r}")
            raise ServiceUnavailableError(SERVICE_NAME, {"reason": "malformed match"}) from exc

        logger.debug(
            f"Geocoded '{place_name}' to {coordinates.latitude},{coordinates.longitude}"
        )
        return coordinates


_client: Optional[GeocoderClient] = None


def get_geocoder_client() -> GeocoderClient:
    """Get the geocoder client singleton."""
    global _client
    if _client is None:
        _client = GeocoderClient()
    return _client
