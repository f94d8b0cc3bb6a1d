"""
Polyline simplification for forecast queries.

Route steps come back from the directions provider with one vertex per road
bend. The forecast endpoint only needs the rough shape, so each step is
reduced with Douglas-Peucker before it is sent.
"""

from shapely.geometry import LineString as ShapelyLineString

from ..models.route import LineString


def simplify_geometry(geometry: LineString, tolerance: float) -> LineString:
    """
    Simplify a LineString using Douglas-Peucker.

    Args:
        geometry: Line to simplify, (lon, lat) positions
        tolerance: Maximum perpendicular deviation in degrees

    Returns:
        A new LineString whose positions are a subsequence of the input,
        endpoints included
    """
    if tolerance <= 0:
        raise ValueError(f"Simplification tolerance must be positive, got {tolerance}")

    if len(geometry.coordinates) <= 2:
        return geometry.model_copy(deep=True)

    line = ShapelyLineString(geometry.coordinates)
    simplified = line.simplify(tolerance, preserve_topology=False)
    if simplified.is_empty:
        # All positions coincide
        return LineString(coordinates=[geometry.coordinates[0], geometry.coordinates[-1]])

    return LineString(coordinates=[(x, y) for x, y in simplified.coords])
