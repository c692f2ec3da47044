# Search pipeline services

from .geocoder_client import GeocoderClient, get_geocoder_client
from .places_client import PlacesClient, get_places_client
from .venue_enricher import VenueEnricher
from .search_orchestrator import SearchOrchestrator
from .map_renderer import build_map_view

__all__ = [
    "GeocoderClient",
    "get_geocoder_client",
    "PlacesClient",
    "get_places_client",
    "VenueEnricher",
    "SearchOrchestrator",
    "build_map_view",
]
