from .base import Envelope, StandardErrorResponse
from .geo import Coordinates
from .venue import (
    VenueAddress,
    VenueCandidate,
    PhotoReference,
    VenueDetail,
    EnrichedVenue,
)
from .search import SearchStatus, SearchState, SearchRequest, SearchStateRead
from .map import MapMarker, MapView

__all__ = [
    "Envelope",
    "StandardErrorResponse",
    "Coordinates",
    "VenueAddress",
    "VenueCandidate",
    "PhotoReference",
    "VenueDetail",
    "EnrichedVenue",
    "SearchStatus",
    "SearchState",
    "SearchRequest",
    "SearchStateRead",
    "MapMarker",
    "MapView",
]
