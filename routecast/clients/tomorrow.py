"""
Tomorrow.io Route API client.
Returns time-windowed forecasts along a sequence of route legs.
"""

from typing import Optional

import httpx

from ..errors import WeatherUnavailable
from ..models.route import NormalizedLeg


class TomorrowRouteClient:
    """
    Client for the Tomorrow.io ``/v4/route`` endpoint.

    All legs of a route go out in a single POST.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.tomorrow.io",
        timeout: float = 30.0,
        send_leg_ids: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ValueError("Tomorrow.io API key is required")
        self.api_key = api_key
        self.send_leg_ids = send_leg_ids
        self.route_url = f"{base_url.rstrip('/')}/v4/route"
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()

    async def test_connection(self) -> bool:
        """Test API connectivity with a single short leg."""
        leg = NormalizedLeg(
            leg_id=0,
            duration_min=5,
            geometry={"coordinates": [(-122.45, 37.78), (-122.40, 37.80)]},
        )
        try:
            route = await self.fetch_route_forecast([leg], ["precipitationIntensity"])
            return len(route) == 1
        except WeatherUnavailable:
            return False

    @staticmethod
    def build_request_body(
        legs: list[NormalizedLeg],
        fields: list[str],
        include_leg_ids: bool = False,
    ) -> dict:
        """
        Request body: requested fields plus each leg's window and geometry.

        With ``include_leg_ids`` every leg also carries its ``legId``.
        """
        body_legs = []
        for leg in legs:
            entry = {
                "duration": leg.duration_min,
                "location": leg.geometry.model_dump(),
            }
            if include_leg_ids:
                entry["legId"] = leg.leg_id
            body_legs.append(entry)

        return {"fields": list(fields), "legs": body_legs}

    async def fetch_route_forecast(
        self,
        legs: list[NormalizedLeg],
        fields: list[str],
    ) -> list[dict]:
        """
        Request forecasts for every leg of a route.

        Args:
            legs: Normalized legs in route order
            fields: Forecast fields to request

        Returns:
            Raw ``data.route`` entries, one per submitted leg
        """
        body = self.build_request_body(legs, fields, include_leg_ids=self.send_leg_ids)

        try:
            response = await self._client.post(
                self.route_url, params={"apikey": self.api_key}, json=body
            )
        except httpx.HTTPError as e:
            raise WeatherUnavailable(f"Route forecast request failed: {e}") from e

        if response.status_code != 200:
            raise WeatherUnavailable(
                f"Route forecast provider returned HTTP {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise WeatherUnavailable("Route forecast provider returned invalid JSON") from e

        payload = data.get("data") if isinstance(data, dict) else None
        route = payload.get("route") if isinstance(payload, dict) else None
        if not isinstance(route, list):
            raise WeatherUnavailable("Route forecast response has no data.route list")

        return route
