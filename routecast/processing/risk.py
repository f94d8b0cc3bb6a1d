"""
Precipitation risk classification.

Thresholds follow the usual rain intensity bands (mm/hr):
    light     <= 2.5
    moderate  2.5 - 10
    heavy     10 - 50
    violent   > 50
Heavy and violent rain share the severe tier.
"""

import math
from typing import Any, Mapping

from ..config import get_yaml_setting
from ..models.route import RiskTier


PRECIPITATION_FIELD = "precipitationIntensity"

RISK_LABELS = {
    RiskTier.UNKNOWN: "unknown",
    RiskTier.MINOR: "minor",
    RiskTier.MODERATE: "moderate",
    RiskTier.SEVERE: "severe",
}

_DEFAULT_COLORS = {
    RiskTier.UNKNOWN: "#91A6DA",
    RiskTier.MINOR: "#FFFF42",
    RiskTier.MODERATE: "#FF7800",
    RiskTier.SEVERE: "#EB002C",
}


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value):
        return None
    return float(value)


def classify_risk(values: Mapping[str, Any]) -> RiskTier:
    """Map a leg's aggregated values to a risk tier. Never raises."""
    intensity = _as_number(values.get(PRECIPITATION_FIELD))
    if intensity is None:
        return RiskTier.UNKNOWN

    # violent rain
    if intensity > 50:
        return RiskTier.SEVERE
    # heavy rain
    if 10 < intensity <= 50:
        return RiskTier.SEVERE
    # moderate rain
    if 2.5 < intensity <= 10:
        return RiskTier.MODERATE
    # light rain
    if intensity <= 2.5:
        return RiskTier.MINOR
    return RiskTier.UNKNOWN


def risk_legend() -> list[dict]:
    """Tier, label and line colour for each risk tier."""
    colors = get_yaml_setting("risk", "colors", default={}) or {}
    return [
        {
            "tier": int(tier),
            "label": RISK_LABELS[tier],
            "color": colors.get(int(tier), _DEFAULT_COLORS[tier]),
        }
        for tier in RiskTier
    ]
