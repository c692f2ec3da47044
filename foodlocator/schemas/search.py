from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from foodlocator.schemas.geo import Coordinates
from foodlocator.schemas.venue import EnrichedVenue


class SearchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class SearchState(BaseModel):
    """Snapshot of the orchestrator's state. Replaced wholesale on every transition."""

    model_config = ConfigDict(frozen=True)

    status: SearchStatus = SearchStatus.IDLE
    query: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    venues: List[EnrichedVenue] = Field(default_factory=list)
    error: Optional[str] = None
    error_code: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.status == SearchStatus.LOADING

    @model_validator(mode="after")
    def _venues_need_coordinates(self):
        if self.venues and self.coordinates is None:
            raise ValueError("venues require coordinates")
        return self


class SearchRequest(BaseModel):
    # Blank names are accepted here; the orchestrator turns them into an error state.
    place_name: str = Field(default="", max_length=256)


class SearchStateRead(BaseModel):
    status: SearchStatus
    loading: bool
    query: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    venues: List[EnrichedVenue] = Field(default_factory=list)
    error: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def from_state(cls, state: SearchState) -> "SearchStateRead":
        return cls(
            status=state.status,
            loading=state.loading,
            query=state.query,
            coordinates=state.coordinates,
            venues=list(state.venues),
            error=state.error,
            error_code=state.error_code,
        )
