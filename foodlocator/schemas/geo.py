from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """A WGS84 point. Immutable once produced by the geocoder."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    def as_ll(self) -> str:
        """Format as the ``lat,lon`` pair expected by the places API."""
        return f"{self.latitude},{self.longitude}"
