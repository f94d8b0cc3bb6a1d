"""
Mapbox Directions API client.
Resolves drawn waypoints into a drivable route split into steps.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ..errors import DirectionsUnavailable, InvalidRoute
from ..models.route import DirectionsStep, Waypoint

logger = logging.getLogger(__name__)


class MapboxDirectionsClient:
    """
    Resolve routes using the Mapbox Directions v5 API.

    Only the first (best) route is used; alternatives are ignored.
    """

    def __init__(
        self,
        access_token: str,
        base_url: str = "https://api.mapbox.com",
        profile: str = "driving",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not access_token:
            raise ValueError("Mapbox access token is required")
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.profile = profile
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()

    async def test_connection(self) -> bool:
        """Test API connectivity."""
        try:
            steps = await self.resolve([(-122.45, 37.78), (-122.40, 37.80)])
            return len(steps) > 0
        except DirectionsUnavailable:
            return False

    async def resolve(self, waypoints: list[Waypoint]) -> list[DirectionsStep]:
        """
        Get turn-by-turn steps for a route through the waypoints.

        Args:
            waypoints: Ordered (lon, lat) tuples, at least two

        Returns:
            Steps of every leg of the first route, flattened in route order
        """
        if len(waypoints) < 2:
            raise InvalidRoute(f"A route needs at least 2 waypoints, got {len(waypoints)}")

        coords_str = ";".join([f"{lon},{lat}" for lon, lat in waypoints])

        url = f"{self.base_url}/directions/v5/mapbox/{self.profile}/{coords_str}"
        params = {
            "geometries": "geojson",
            "steps": "true",
            "access_token": self.access_token,
        }

        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as e:
            raise DirectionsUnavailable(f"Directions request failed: {e}") from e

        if response.status_code != 200:
            raise DirectionsUnavailable(
                f"Directions provider returned HTTP {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise DirectionsUnavailable("Directions provider returned invalid JSON") from e

        if not isinstance(data, dict) or data.get("code", "Ok") != "Ok":
            code = data.get("code") if isinstance(data, dict) else None
            raise DirectionsUnavailable(f"Directions provider error: {code or 'Unknown'}")

        routes = data.get("routes")
        if not isinstance(routes, list) or not routes:
            raise DirectionsUnavailable("Directions provider returned no route")

        return self._flatten_steps(routes[0])

    def _flatten_steps(self, route: dict) -> list[DirectionsStep]:
        """Merge the steps of all legs into one ordered list."""
        try:
            steps = [
                DirectionsStep(duration_s=step["duration"], geometry=step["geometry"])
                for leg in route.get("legs", [])
                for step in leg.get("steps", [])
            ]
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            raise DirectionsUnavailable(f"Malformed directions step: {e}") from e

        logger.info(f"Resolved route into {len(steps)} steps")
        return steps
