"""
Test precipitation risk classification and feature assembly.
"""

import json
import math

from ..models.route import AnnotatedLeg, LineString, RiskTier
from ..processing.features import assemble_features
from ..processing.risk import classify_risk, risk_legend


def _risk(intensity) -> int:
    return int(classify_risk({"precipitationIntensity": intensity}))


def test_risk_tiers():
    """Test RiskTier values."""
    assert RiskTier.UNKNOWN == 0
    assert RiskTier.MINOR == 1
    assert RiskTier.MODERATE == 2
    assert RiskTier.SEVERE == 3


def test_risk_thresholds():
    """Test classification across the intensity bands and boundaries."""
    print("\n=== Testing Risk Thresholds ===")

    assert _risk(0) == 1
    assert _risk(1.2) == 1
    assert _risk(2.5) == 1
    assert _risk(2.5001) == 2
    assert _risk(3) == 2
    assert _risk(10) == 2
    assert _risk(10.001) == 3
    assert _risk(12) == 3
    assert _risk(50) == 3
    assert _risk(50.001) == 3
    assert _risk(120) == 3

    print("✓ Boundaries resolve to the lower tier")


def test_heavy_and_violent_rain_share_tier():
    """Test that 10-50 mm/hr and >50 mm/hr both give the severe tier."""
    assert _risk(30) == _risk(80) == RiskTier.SEVERE


def test_risk_unknown_inputs():
    """Test that missing or unusable intensity gives tier 0."""
    print("\n=== Testing Unknown Risk ===")

    assert classify_risk({}) == RiskTier.UNKNOWN
    assert _risk(None) == 0
    assert _risk(float("nan")) == 0
    assert _risk("heavy") == 0
    assert classify_risk({"temperature": 20}) == RiskTier.UNKNOWN

    print("✓ Unknown inputs map to tier 0")


def test_risk_legend():
    """Test that the legend covers every tier with a colour."""
    legend = risk_legend()

    assert [entry["tier"] for entry in legend] == [0, 1, 2, 3]
    assert [entry["label"] for entry in legend] == ["unknown", "minor", "moderate", "severe"]
    assert legend[3]["color"] == "#EB002C"
    assert all(entry["color"].startswith("#") for entry in legend)


def _leg(leg_id: int, duration: float, values: dict) -> AnnotatedLeg:
    return AnnotatedLeg(
        leg_id=leg_id,
        duration_min=duration,
        geometry=LineString(coordinates=[(leg_id, 0), (leg_id + 1, 0)]),
        values=values,
    )


def test_assemble_features():
    """Test one feature per leg with values, risk and duration."""
    print("\n=== Testing Feature Assembly ===")

    legs = [
        _leg(0, 5, {"precipitationIntensity": 3.0}),
        _leg(1, 20, {"precipitationIntensity": 12.0}),
        _leg(2, 7.5, {"precipitationIntensity": 0.4}),
    ]

    collection = assemble_features(legs)

    assert collection.type == "FeatureCollection"
    assert len(collection.features) == 3
    assert [f.geometry.coordinates[0][0] for f in collection.features] == [0, 1, 2]
    assert [f.properties["risk"] for f in collection.features] == [2, 3, 1]
    assert [f.properties["duration"] for f in collection.features] == [5, 20, 7.5]
    assert collection.features[1].properties["precipitationIntensity"] == 12.0
    assert collection.features[0].type == "Feature"
    assert collection.features[0].geometry.type == "LineString"

    print("✓ Features assembled in order")


def test_assemble_empty():
    """Test that no legs gives an empty collection, not None."""
    collection = assemble_features([])

    assert collection is not None
    assert collection.features == []
    assert collection.model_dump() == {"type": "FeatureCollection", "features": []}


def test_assemble_unknown_value_is_json_safe():
    """Test that a NaN forecast value becomes null with unknown risk."""
    collection = assemble_features([_leg(0, 5, {"precipitationIntensity": math.nan})])
    properties = collection.features[0].properties

    assert properties["precipitationIntensity"] is None
    assert properties["risk"] == 0
    json.loads(collection.model_dump_json())


def run_all_tests():
    """Run all risk and feature tests."""
    print("\n" + "=" * 60)
    print("RISK AND FEATURES - TEST SUITE")
    print("=" * 60)

    test_risk_tiers()
    test_risk_thresholds()
    test_heavy_and_violent_rain_share_tier()
    test_risk_unknown_inputs()
    test_risk_legend()
    test_assemble_features()
    test_assemble_empty()
    test_assemble_unknown_value_is_json_safe()

    print("\n" + "=" * 60)
    print("✅ ALL RISK TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    run_all_tests()
