"""
Venue records produced by the search pipeline.

``VenueCandidate`` comes from the places search, ``VenueDetail`` from the
per-venue detail lookup, and ``EnrichedVenue`` is the merged, display-ready
record. Ratings use the Foursquare 0-10 scale.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from foodlocator.schemas.geo import Coordinates

RATING_MIN = 0.0
RATING_MAX = 10.0


class VenueAddress(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: Optional[str] = None
    locality: Optional[str] = None
    formatted_address: Optional[str] = None


class VenueCandidate(BaseModel):
    """Raw places search result."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    coordinates: Coordinates
    categories: List[str] = Field(default_factory=list)
    location: VenueAddress = Field(default_factory=VenueAddress)


class PhotoReference(BaseModel):
    """A photo split around its size token: ``prefix + "<w>x<h>" + suffix``."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    prefix: str
    suffix: str
    width: Optional[int] = None
    height: Optional[int] = None

    def url(self, width: int, height: int) -> str:
        return f"{self.prefix}{width}x{height}{self.suffix}"


class VenueDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    photos: List[PhotoReference] = Field(default_factory=list)
    rating: Optional[float] = Field(default=None, ge=RATING_MIN, le=RATING_MAX)


class EnrichedVenue(VenueCandidate):
    """Candidate plus detail fields; detail defaults apply when enrichment failed."""

    photos: List[PhotoReference] = Field(default_factory=list)
    rating: Optional[float] = Field(default=None, ge=RATING_MIN, le=RATING_MAX)
    enriched: bool = True

    @classmethod
    def from_parts(
        cls,
        candidate: VenueCandidate,
        detail: Optional[VenueDetail] = None,
    ) -> "EnrichedVenue":
        if detail is None:
            return cls(**candidate.model_dump(), enriched=False)
        return cls(
            **candidate.model_dump(),
            photos=list(detail.photos),
            rating=detail.rating,
            enriched=True,
        )

    def thumbnail_url(self, width: int, height: int) -> Optional[str]:
        if not self.photos:
            return None
        return self.photos[0].url(width, height)
