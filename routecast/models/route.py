"""Route, leg and risk models passed between pipeline stages."""

from enum import IntEnum
from typing import Literal
from pydantic import BaseModel, Field, field_validator


# (longitude, latitude) - GeoJSON axis order
Waypoint = tuple[float, float]


class LineString(BaseModel):
    """GeoJSON LineString geometry."""
    type: Literal["LineString"] = "LineString"
    coordinates: list[tuple[float, float]] = Field(
        description="Ordered (lon, lat) positions"
    )

    @field_validator("coordinates", mode="before")
    @classmethod
    def drop_extra_dimensions(cls, value):
        # Providers may append elevation as a third ordinate
        if not isinstance(value, (list, tuple)):
            return value
        return [
            tuple(position[:2]) if isinstance(position, (list, tuple)) else position
            for position in value
        ]

    @field_validator("coordinates")
    @classmethod
    def not_empty(cls, value):
        if not value:
            raise ValueError("LineString needs at least one position")
        return value


class DirectionsStep(BaseModel):
    """One turn-by-turn step of the resolved route."""
    duration_s: float = Field(description="Travel time for this step in seconds", ge=0)
    geometry: LineString


class NormalizedLeg(BaseModel):
    """A step prepared for the forecast query."""
    leg_id: int = Field(description="Position of the leg along the route")
    duration_min: float = Field(description="Forecast window in minutes, floor applied", ge=5)
    geometry: LineString = Field(description="Simplified step geometry")


class AnnotatedLeg(NormalizedLeg):
    """A leg with its worst-case forecast values attached."""
    values: dict[str, float] = Field(
        default_factory=dict,
        description="Per-field maximum across the leg's forecast intervals",
    )


class RiskTier(IntEnum):
    """Precipitation exposure classification for a route segment."""
    UNKNOWN = 0
    MINOR = 1
    MODERATE = 2
    SEVERE = 3
