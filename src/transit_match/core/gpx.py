"""GPX file parsing into route polylines."""

import gpxpy

from transit_match.models import LonLat


def parse_gpx_route(filepath: str) -> dict:
    """Parse a GPX file and flatten its tracks into one (lon, lat) polyline.

    Track points are taken in file order across all tracks and segments.
    GPX routes (<rte>) are used only when the file has no track points.
    """
    with open(filepath, "r") as f:
        gpx = gpxpy.parse(f)

    coordinates: list[LonLat] = []
    for track in gpx.tracks:
        for segment in track.segments:
            for point in segment.points:
                coordinates.append((point.longitude, point.latitude))

    if not coordinates:
        for rte in gpx.routes:
            for point in rte.points:
                coordinates.append((point.longitude, point.latitude))

    name = None
    if gpx.tracks and gpx.tracks[0].name:
        name = gpx.tracks[0].name
    elif gpx.routes and gpx.routes[0].name:
        name = gpx.routes[0].name

    return {
        "name": name or gpx.name,
        "coordinates": coordinates,
    }
