"""
Test route geometry simplification and leg normalization.
"""

from ..models.route import DirectionsStep, LineString
from ..processing.legs import normalize_duration, normalize_legs
from ..processing.simplify import simplify_geometry


def _zigzag() -> LineString:
    """Mostly straight line with one real bend and some sub-tolerance jitter."""
    return LineString(coordinates=[
        (0.0, 0.0),
        (0.001, 0.00001),
        (0.002, -0.00001),
        (0.003, 0.0),
        (0.004, 0.002),
        (0.005, 0.004),
        (0.006, 0.00401),
        (0.007, 0.004),
    ])


def test_simplify_removes_jitter():
    """Test that sub-tolerance vertices are dropped and endpoints kept."""
    print("\n=== Testing Simplification ===")

    line = _zigzag()
    simplified = simplify_geometry(line, 0.001)

    assert simplified.coordinates[0] == line.coordinates[0]
    assert simplified.coordinates[-1] == line.coordinates[-1]
    assert len(simplified.coordinates) < len(line.coordinates)
    # Every kept vertex comes from the input, in order
    positions = [line.coordinates.index(c) for c in simplified.coordinates]
    assert positions == sorted(positions)
    # The bend survives
    assert (0.005, 0.004) in simplified.coordinates or (0.003, 0.0) in simplified.coordinates

    print("✓ Jitter removed, endpoints and bend preserved")


def test_simplify_degenerate_input():
    """Test that lines with two or fewer points come back unchanged."""
    print("\n=== Testing Degenerate Simplification ===")

    single = LineString(coordinates=[(1.0, 2.0)])
    pair = LineString(coordinates=[(1.0, 2.0), (1.0000001, 2.0)])

    assert simplify_geometry(single, 0.001).coordinates == [(1.0, 2.0)]
    assert simplify_geometry(pair, 0.001).coordinates == pair.coordinates

    print("✓ Degenerate lines unchanged")


def test_simplify_is_idempotent():
    """Test that simplifying twice gives the same line."""
    print("\n=== Testing Simplification Idempotence ===")

    once = simplify_geometry(_zigzag(), 0.001)
    twice = simplify_geometry(once, 0.001)

    assert twice.coordinates == once.coordinates

    print("✓ Simplified line is a fixed point")


def test_simplify_does_not_mutate_input():
    """Test that the input geometry is left alone."""
    line = _zigzag()
    before = list(line.coordinates)

    simplify_geometry(line, 0.001)

    assert line.coordinates == before


def test_simplify_rejects_bad_tolerance():
    """Test that a non-positive tolerance is refused."""
    for tolerance in (0, -0.5):
        try:
            simplify_geometry(_zigzag(), tolerance)
        except ValueError:
            continue
        raise AssertionError(f"tolerance {tolerance} accepted")


def test_linestring_drops_elevation():
    """Test that 3D positions from providers are reduced to (lon, lat)."""
    line = LineString.model_validate(
        {"type": "LineString", "coordinates": [[1, 2, 30], [3, 4, 50]]}
    )
    assert line.coordinates == [(1.0, 2.0), (3.0, 4.0)]


def test_normalize_duration():
    """Test the 5 minute floor and seconds to minutes conversion."""
    print("\n=== Testing Duration Normalization ===")

    assert normalize_duration(0) == 5
    assert normalize_duration(120) == 5
    assert normalize_duration(200) == 5
    assert normalize_duration(300) == 5
    assert normalize_duration(900) == 15
    assert normalize_duration(1200) == 20
    assert normalize_duration(301) == 301 / 60

    print("✓ Durations floored at 5 minutes")


def test_normalize_legs():
    """Test one leg per step, in order, with simplified geometry."""
    print("\n=== Testing Leg Normalization ===")

    steps = [
        DirectionsStep(duration_s=200, geometry=_zigzag()),
        DirectionsStep(duration_s=1200, geometry=LineString(coordinates=[(0, 0), (1, 1)])),
        DirectionsStep(duration_s=30, geometry=LineString(coordinates=[(1, 1), (2, 2)])),
    ]

    legs = normalize_legs(steps, 0.001)

    assert [leg.leg_id for leg in legs] == [0, 1, 2]
    assert [leg.duration_min for leg in legs] == [5, 20, 5]
    assert len(legs[0].geometry.coordinates) < len(steps[0].geometry.coordinates)
    assert legs[1].geometry.coordinates == [(0.0, 0.0), (1.0, 1.0)]
    # Steps untouched
    assert len(steps[0].geometry.coordinates) == 8

    assert normalize_legs([], 0.001) == []

    print("✓ Legs normalized in route order")


def run_all_tests():
    """Run all geometry tests."""
    print("\n" + "=" * 60)
    print("GEOMETRY AND LEGS - TEST SUITE")
    print("=" * 60)

    test_simplify_removes_jitter()
    test_simplify_degenerate_input()
    test_simplify_is_idempotent()
    test_simplify_does_not_mutate_input()
    test_simplify_rejects_bad_tolerance()
    test_linestring_drops_elevation()
    test_normalize_duration()
    test_normalize_legs()

    print("\n" + "=" * 60)
    print("✅ ALL GEOMETRY TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    run_all_tests()
