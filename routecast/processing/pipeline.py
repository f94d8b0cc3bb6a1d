"""
Route weather annotation pipeline.

Integrates:
- Mapbox Directions (route steps)
- Tomorrow.io Route API (forecast along each step)

waypoints -> steps -> legs -> forecast values -> risk -> FeatureCollection
"""

import logging
from typing import Optional

import httpx

from ..config import Config, get_yaml_setting
from ..clients.mapbox import MapboxDirectionsClient
from ..clients.tomorrow import TomorrowRouteClient
from ..errors import InvalidRoute, RoutecastError
from ..models.features import AnnotationSnapshot, FeatureCollection
from ..models.route import Waypoint
from ..storage.annotations import AnnotationStore
from .features import assemble_features
from .legs import normalize_legs
from .weather import WeatherAnnotator

logger = logging.getLogger(__name__)


class RoutePipeline:
    """
    Annotates a finalized route with precipitation risk.

    The directions call and the forecast call run one after the other; the
    forecast query needs the resolved step geometry.
    """

    def __init__(
        self,
        config: Config,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        timeout = float(get_yaml_setting("http", "timeout_seconds", default=30.0))

        self.directions = MapboxDirectionsClient(
            config.mapbox_access_token,
            base_url=get_yaml_setting("mapbox", "base_url", default="https://api.mapbox.com"),
            profile=config.directions_profile,
            timeout=timeout,
            transport=transport,
        )
        self.weather_client = TomorrowRouteClient(
            config.tomorrow_api_key,
            base_url=get_yaml_setting("tomorrow", "base_url", default="https://api.tomorrow.io"),
            timeout=timeout,
            send_leg_ids=config.send_leg_ids,
            transport=transport,
        )
        self.annotator = WeatherAnnotator(self.weather_client)

    async def close(self):
        """Close all HTTP clients."""
        await self.directions.close()
        await self.weather_client.close()

    async def test_all_apis(self) -> dict[str, bool]:
        """Test connectivity to all APIs."""
        return {
            "mapbox_directions": await self.directions.test_connection(),
            "tomorrow_route": await self.weather_client.test_connection(),
        }

    async def annotate_route(self, waypoints: list[Waypoint]) -> FeatureCollection:
        """
        Run the full pipeline for one route.

        Args:
            waypoints: Ordered (lon, lat) tuples drawn by the user

        Returns:
            One Feature per route step, in route order

        Raises:
            InvalidRoute: fewer than 2 waypoints (no request is made)
            DirectionsUnavailable: no route from the directions provider
            WeatherUnavailable: no usable forecast for the legs
        """
        waypoints = [(float(lon), float(lat)) for lon, lat in waypoints]
        if len(waypoints) < 2:
            raise InvalidRoute(f"A route needs at least 2 waypoints, got {len(waypoints)}")

        logger.info(f"Resolving directions for {len(waypoints)} waypoints...")
        steps = await self.directions.resolve(waypoints)

        logger.info("Normalizing legs...")
        legs = normalize_legs(steps, self.config.simplify_tolerance)
        if not legs:
            logger.warning("Directions returned no steps, nothing to annotate")
            return FeatureCollection()

        logger.info(f"Requesting forecast for {len(legs)} legs...")
        annotated = await self.annotator.annotate(legs, list(self.config.weather_fields))

        collection = assemble_features(annotated)
        logger.info(f"Route annotation complete: {len(collection.features)} features")
        logger.debug(collection.model_dump_json())

        return collection

    async def run_finalized(
        self,
        waypoints: list[Waypoint],
        store: AnnotationStore,
    ) -> Optional[AnnotationSnapshot]:
        """
        Annotate a finalized route and publish it if it is still the newest run.

        Returns:
            The published snapshot, or None if a newer run started meanwhile

        Raises:
            RoutecastError: the run failed; the store is left untouched
        """
        token = store.begin_run()
        logger.info(f"Starting annotation run {token}")

        try:
            collection = await self.annotate_route(waypoints)
        except RoutecastError as e:
            logger.error(f"Annotation run {token} failed: {e}")
            raise

        snapshot = AnnotationSnapshot(
            run_token=token,
            waypoints=waypoints,
            collection=collection,
        )
        if not store.publish(snapshot):
            return None
        return snapshot
