"""API clients for external services."""

from .mapbox import MapboxDirectionsClient
from .tomorrow import TomorrowRouteClient

__all__ = [
    "MapboxDirectionsClient",
    "TomorrowRouteClient",
]
