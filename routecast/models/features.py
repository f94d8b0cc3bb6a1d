"""GeoJSON output models and the stored annotation snapshot."""

from datetime import datetime
from typing import Any, Literal
from pydantic import BaseModel, Field

from .route import LineString, Waypoint


class Feature(BaseModel):
    """One annotated route segment."""
    type: Literal["Feature"] = "Feature"
    properties: dict[str, Any] = Field(
        description="Aggregated forecast values plus risk and duration"
    )
    geometry: LineString


class FeatureCollection(BaseModel):
    """Annotated route, consumed whole by the renderer."""
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[Feature] = Field(default_factory=list)


class AnnotationSnapshot(BaseModel):
    """Result of the newest successful pipeline run."""
    run_token: int
    created_at: datetime = Field(default_factory=datetime.utcnow)
    waypoints: list[Waypoint]
    collection: FeatureCollection
