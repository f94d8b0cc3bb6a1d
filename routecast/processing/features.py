"""Annotated legs -> GeoJSON FeatureCollection for the map renderer."""

import math

from ..models.features import Feature, FeatureCollection
from ..models.route import AnnotatedLeg
from .risk import classify_risk


def _json_safe(values: dict[str, float]) -> dict[str, float | None]:
    # NaN (no forecast value) is not valid JSON
    return {
        field: None if isinstance(value, float) and math.isnan(value) else value
        for field, value in values.items()
    }


def assemble_features(legs: list[AnnotatedLeg]) -> FeatureCollection:
    """
    Build one Feature per leg, in route order.

    Properties carry the leg's aggregated forecast values plus ``risk`` and
    ``duration`` (minutes). No legs gives an empty collection, never None.
    """
    return FeatureCollection(
        features=[
            Feature(
                properties={
                    **_json_safe(leg.values),
                    "risk": int(classify_risk(leg.values)),
                    "duration": leg.duration_min,
                },
                geometry=leg.geometry,
            )
            for leg in legs
        ]
    )
