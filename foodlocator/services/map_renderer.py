"""Map view construction for the client-side map widget."""
from typing import Optional

from foodlocator.config.settings import MapSettings, get_settings
from foodlocator.schemas.map import MapMarker, MapView
from foodlocator.schemas.search import SearchState


def build_map_view(state: SearchState, settings: Optional[MapSettings] = None) -> Optional[MapView]:
    """
    Build the map input for ``state``.

    Returns None until coordinates are known. The user's location is the
    first marker; venue markers follow in venue order.
    """
    if state.coordinates is None:
        return None
    map_settings = settings or get_settings().map

    markers = [MapMarker(position=state.coordinates, label=map_settings.user_marker_label)]
    markers.extend(
        MapMarker(position=venue.coordinates, label=venue.name, venue_id=venue.id)
        for venue in state.venues
    )
    return MapView(
        center=state.coordinates,
        zoom=map_settings.zoom,
        tile_url=map_settings.tile_url,
        attribution=map_settings.attribution,
        markers=markers,
    )
