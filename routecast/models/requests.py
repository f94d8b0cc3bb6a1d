"""API request models."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator


def _check_positions(value: list[tuple[float, float]]) -> list[tuple[float, float]]:
    for lon, lat in value:
        if not -180 <= lon <= 180:
            raise ValueError(f"Longitude out of range: {lon}")
        if not -90 <= lat <= 90:
            raise ValueError(f"Latitude out of range: {lat}")
    return value


class AnnotateRequest(BaseModel):
    """Request body for one-shot route annotation."""
    waypoints: list[tuple[float, float]] = Field(
        description="Ordered (lon, lat) waypoints of the drawn route"
    )

    @field_validator("waypoints")
    @classmethod
    def validate_waypoints(cls, value):
        return _check_positions(value)


class EditorEventType(str, Enum):
    """Events emitted by the drawing UI."""
    FEATURE_ADDED = "feature_added"
    SELECTED = "selected"
    EDITED = "edited"
    DESELECTED = "deselected"
    RESET = "reset"


class EditorEventRequest(BaseModel):
    """Request body for a route editor event."""
    event: EditorEventType
    coordinates: Optional[list[tuple[float, float]]] = Field(
        default=None,
        description="Route coordinates, required for feature_added and edited",
    )

    @field_validator("coordinates")
    @classmethod
    def validate_coordinates(cls, value):
        if value is None:
            return value
        return _check_positions(value)
