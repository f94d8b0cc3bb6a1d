"""
Forecast annotation of route legs.

Each leg's forecast comes back as a timeline of intervals covering the
leg's travel window. The leg keeps the worst value seen in any interval,
not the average: a traveler may hit any of them.
"""

import logging
from typing import Any, Optional

import numpy as np

from ..clients.tomorrow import TomorrowRouteClient
from ..errors import WeatherUnavailable
from ..models.route import AnnotatedLeg, NormalizedLeg

logger = logging.getLogger(__name__)

# Request and response key carrying the leg identifier
LEG_ID_KEY = "legId"


def _interval_value(interval: Any, field: str) -> float:
    values = interval.get("values") if isinstance(interval, dict) else None
    if not isinstance(values, dict):
        raise WeatherUnavailable("Forecast interval has no values mapping")
    value = values.get(field)
    if value is None:
        return np.nan
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise WeatherUnavailable(f"Non-numeric forecast value for {field}: {value!r}")
    return float(value)


def aggregate_intervals(intervals: list[dict], fields: list[str]) -> dict[str, float]:
    """
    Column-wise maximum of forecast intervals.

    A field missing from any interval makes that field's maximum NaN.

    Args:
        intervals: ``[{"values": {field: number}}, ...]``
        fields: Fields to aggregate

    Returns:
        ``{field: max value}``
    """
    if not intervals:
        raise WeatherUnavailable("Forecast timeline has no intervals")

    matrix = np.array(
        [[_interval_value(interval, field) for field in fields] for interval in intervals],
        dtype=float,
    ).reshape(len(intervals), len(fields))
    maxima = matrix.max(axis=0)

    return {field: float(value) for field, value in zip(fields, maxima)}


def _timeline_intervals(entry: Any) -> list[dict]:
    timeline = entry.get("timeline") if isinstance(entry, dict) else None
    intervals = timeline.get("intervals") if isinstance(timeline, dict) else None
    if not isinstance(intervals, list):
        raise WeatherUnavailable("Forecast route entry has no timeline.intervals list")
    return intervals


def _echoed_leg_id(entry: Any) -> Optional[int]:
    if not isinstance(entry, dict):
        return None
    value = entry.get(LEG_ID_KEY)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def match_route_entries(
    legs: list[NormalizedLeg],
    route: list[Any],
    by_id: bool = False,
) -> list[Any]:
    """
    Pair each leg with its forecast entry.

    Entries are matched by position unless the request carried leg ids
    (``by_id``) and the provider echoed them back on every entry. Either
    way there must be exactly one entry per leg.
    """
    if len(route) != len(legs):
        raise WeatherUnavailable(
            f"Forecast returned {len(route)} route entries for {len(legs)} legs"
        )

    if not by_id:
        return list(route)

    echoed = [_echoed_leg_id(entry) for entry in route]
    if all(leg_id is None for leg_id in echoed):
        return list(route)
    if any(leg_id is None for leg_id in echoed):
        raise WeatherUnavailable("Forecast echoed leg ids on only some entries")

    entries_by_id = dict(zip(echoed, route))
    if len(entries_by_id) != len(route):
        raise WeatherUnavailable("Forecast returned duplicate leg identifiers")
    try:
        return [entries_by_id[leg.leg_id] for leg in legs]
    except KeyError as e:
        raise WeatherUnavailable(f"Forecast has no entry for leg {e.args[0]}") from e


class WeatherAnnotator:
    """Attach worst-case forecast values to every leg of a route."""

    def __init__(self, client: TomorrowRouteClient):
        self.client = client

    async def annotate(
        self,
        legs: list[NormalizedLeg],
        fields: list[str],
    ) -> list[AnnotatedLeg]:
        """
        Query the forecast for all legs in one request and aggregate per leg.

        Raises:
            WeatherUnavailable: request failed or the response does not
                cover every leg; no leg is annotated in that case
        """
        route = await self.client.fetch_route_forecast(legs, fields)
        entries = match_route_entries(legs, route, by_id=self.client.send_leg_ids)

        annotated = [
            AnnotatedLeg(
                **leg.model_dump(),
                values=aggregate_intervals(_timeline_intervals(entry), fields),
            )
            for leg, entry in zip(legs, entries)
        ]

        logger.info(f"Annotated {len(annotated)} legs with {', '.join(fields)}")
        return annotated
