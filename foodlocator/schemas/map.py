from typing import List

from pydantic import BaseModel, Field

from foodlocator.schemas.geo import Coordinates


class MapMarker(BaseModel):
    position: Coordinates
    label: str
    venue_id: str | None = None


class MapView(BaseModel):
    """Input for the client-side map widget; it recentres whenever ``center`` changes."""

    center: Coordinates
    zoom: int
    tile_url: str
    attribution: str
    markers: List[MapMarker] = Field(default_factory=list)
