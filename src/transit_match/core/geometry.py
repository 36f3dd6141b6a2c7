"""Great-circle distances between points, segments and route polylines.

Points are ``(lon, lat)`` tuples in degrees. Segment projection is done on
raw degree values (locally planar), then measured with the haversine
formula. That is accurate for short urban segments and degrades near the
poles or for segments spanning large distances.
"""

import math
from typing import Sequence

import numpy as np

from ..models import LonLat

EARTH_RADIUS_M = 6_371_000.0


def great_circle_distance(p1: LonLat, p2: LonLat) -> float:
    """Haversine distance in meters between two (lon, lat) points."""
    lon1, lat1 = p1
    lon2, lat2 = p2
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(min(a, 1.0)))


def point_to_segment_distance(p: LonLat, a: LonLat, b: LonLat) -> float:
    """Distance in meters from ``p`` to the closest point of segment ``[a, b]``."""
    px, py = p
    ax, ay = a
    bx, by = b
    dx = bx - ax
    dy = by - ay

    if dx == 0 and dy == 0:
        return great_circle_distance(p, a)

    t = ((px - ax) * dx + (py - ay) * dy) / (dx * dx + dy * dy)
    if t <= 0:
        closest = (ax, ay)
    elif t >= 1:
        closest = (bx, by)
    else:
        closest = (ax + t * dx, ay + t * dy)
    return great_circle_distance(p, closest)


def _haversine_array(lon1, lat1, lons2: np.ndarray, lats2: np.ndarray) -> np.ndarray:
    d_lat = np.radians(lats2 - lat1)
    d_lon = np.radians(lons2 - lon1)
    a = (
        np.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * np.cos(np.radians(lats2)) * np.sin(d_lon / 2) ** 2
    )
    # Rounding can push a a hair above 1 for antipodal points
    return 2 * EARTH_RADIUS_M * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))


def min_distance_to_route(point: LonLat, polyline: Sequence[LonLat]) -> float:
    """Minimum distance in meters from ``point`` to any segment of ``polyline``.

    A polyline with fewer than two points has no segments and is infinitely
    far away, which keeps it out of every match.
    """
    if len(polyline) < 2:
        return math.inf

    coords = np.asarray(polyline, dtype=float)
    starts = coords[:-1]
    ends = coords[1:]
    px, py = point

    dx = ends[:, 0] - starts[:, 0]
    dy = ends[:, 1] - starts[:, 1]
    length_sq = dx * dx + dy * dy
    degenerate = length_sq == 0

    with np.errstate(divide="ignore", invalid="ignore"):
        t = ((px - starts[:, 0]) * dx + (py - starts[:, 1]) * dy) / length_sq
    # Degenerate segments collapse onto their start point
    t = np.where(degenerate, 0.0, t)

    interior = (t > 0) & (t < 1)
    closest = np.where((t <= 0)[:, None], starts, ends)
    closest = np.where(
        interior[:, None],
        starts + t[:, None] * np.column_stack((dx, dy)),
        closest,
    )
    closest_lon = closest[:, 0]
    closest_lat = closest[:, 1]
    distances = _haversine_array(px, py, closest_lon, closest_lat)
    return float(distances.min())
