"""Directions steps -> forecast legs."""

from ..models.route import DirectionsStep, NormalizedLeg
from .simplify import simplify_geometry


# The route forecast endpoint rejects windows shorter than this
MIN_LEG_MINUTES = 5.0


def normalize_duration(duration_s: float) -> float:
    """Convert a step duration to minutes, rounding short steps up to the minimum window."""
    return max(MIN_LEG_MINUTES, duration_s / 60)


def normalize_legs(
    steps: list[DirectionsStep],
    simplify_tolerance: float,
) -> list[NormalizedLeg]:
    """
    Build one forecast leg per directions step, in route order.

    Short steps are kept with the minimum window rather than dropped, so
    every part of the route gets a forecast.
    """
    return [
        NormalizedLeg(
            leg_id=index,
            duration_min=normalize_duration(step.duration_s),
            geometry=simplify_geometry(step.geometry, simplify_tolerance),
        )
        for index, step in enumerate(steps)
    ]
