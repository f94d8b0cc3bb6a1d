"""Pydantic models for the route annotation pipeline."""

from .route import (
    Waypoint,
    LineString,
    DirectionsStep,
    NormalizedLeg,
    AnnotatedLeg,
    RiskTier,
)
from .features import (
    Feature,
    FeatureCollection,
    AnnotationSnapshot,
)
from .requests import (
    AnnotateRequest,
    EditorEventType,
    EditorEventRequest,
)

__all__ = [
    # Pipeline models
    "Waypoint",
    "LineString",
    "DirectionsStep",
    "NormalizedLeg",
    "AnnotatedLeg",
    "RiskTier",
    # Output models
    "Feature",
    "FeatureCollection",
    "AnnotationSnapshot",
    # Request models
    "AnnotateRequest",
    "EditorEventType",
    "EditorEventRequest",
]
