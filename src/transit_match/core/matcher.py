"""Single-route and transfer matching of an origin/destination pair.

Both searches scan routes in the order given and return the first plan that
qualifies. They never mutate their inputs, so callers should pass a stable
snapshot of the catalog.
"""

import logging
from typing import Optional, Sequence, Union

from .geometry import min_distance_to_route
from .models import MatchPlan
from ..models import Coordinate, LonLat, Route

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD_M = 300.0

Point = Union[Coordinate, LonLat]


def _lonlat(point: Point) -> LonLat:
    if isinstance(point, Coordinate):
        return point.as_lonlat()
    lon, lat = point
    return (float(lon), float(lat))


def _check_threshold(threshold_m: float) -> None:
    if threshold_m < 0:
        raise ValueError(f"threshold_m must be non-negative, got {threshold_m}")


def _transfer_samples(coordinates: Sequence[LonLat]) -> list[LonLat]:
    """First, middle (by index) and last point of a polyline."""
    return [coordinates[0], coordinates[len(coordinates) // 2], coordinates[-1]]


def find_single_ride(
    origin: Point,
    destination: Point,
    routes: Sequence[Route],
    threshold_m: float = DEFAULT_THRESHOLD_M,
) -> Optional[MatchPlan]:
    """Return the first route within ``threshold_m`` of both points, if any."""
    _check_threshold(threshold_m)
    o = _lonlat(origin)
    d = _lonlat(destination)

    for route in routes:
        if (
            min_distance_to_route(o, route.coordinates) <= threshold_m
            and min_distance_to_route(d, route.coordinates) <= threshold_m
        ):
            logger.debug("Single ride on route %s (%s)", route.id, route.name)
            return MatchPlan(kind="single", routes=[route])
    return None


def find_double_ride(
    origin: Point,
    destination: Point,
    routes: Sequence[Route],
    threshold_m: float = DEFAULT_THRESHOLD_M,
) -> Optional[MatchPlan]:
    """Return the first two-route transfer connecting the points, if any.

    For every route near the origin, only its first, middle and last points
    are tried as transfer locations. A second route qualifies when that
    sample and the destination are both within ``threshold_m`` of it.
    """
    _check_threshold(threshold_m)
    o = _lonlat(origin)
    d = _lonlat(destination)

    for first in routes:
        if min_distance_to_route(o, first.coordinates) > threshold_m:
            continue

        for sample in _transfer_samples(first.coordinates):
            for second in routes:
                if second.id == first.id:
                    continue
                if (
                    min_distance_to_route(sample, second.coordinates) <= threshold_m
                    and min_distance_to_route(d, second.coordinates) <= threshold_m
                ):
                    logger.debug(
                        "Double ride: %s -> %s, transfer near %s", first.id, second.id, sample
                    )
                    return MatchPlan(kind="double", routes=[first, second])
    return None


def match_route(
    origin: Point,
    destination: Point,
    routes: Sequence[Route],
    threshold_m: float = DEFAULT_THRESHOLD_M,
) -> Optional[MatchPlan]:
    """Try a single ride first, then a transfer. ``None`` means no route found."""
    plan = find_single_ride(origin, destination, routes, threshold_m)
    if plan is None:
        plan = find_double_ride(origin, destination, routes, threshold_m)
    if plan is None:
        logger.debug("No route within %.0fm of %s and %s", threshold_m, origin, destination)
    return plan
