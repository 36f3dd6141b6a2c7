"""Matching tools: recommend_route, route_distance, set_match_params."""

import json
import math

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import state
from ..models import Coordinate
from ..core.geometry import min_distance_to_route
from ..core.matcher import match_route
from ._prereqs import require_state


def register_match_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def recommend_route(
        origin_lon: float,
        origin_lat: float,
        destination_lon: float,
        destination_lat: float,
        threshold_m: float | None = None,
    ) -> str:
        """Find a route serving both points, or a two-route transfer between them.

        A route serves a point when its polyline passes within threshold_m of
        it. Single rides are preferred; transfers are tried only when no
        single route works. The first qualifying plan in catalog order wins.
        **Requires:** routes loaded (load_catalog, add_route or import_gpx_route).

        Args:
            origin_lon/origin_lat: Where the rider starts (degrees).
            destination_lon/destination_lat: Where the rider is going (degrees).
            threshold_m: Maximum walking distance to a route in meters.
                Default: the server's threshold (see set_match_params).
        """
        try:
            require_state(state, routes=True)
        except ValueError as e:
            return f"Error: {e}"

        try:
            origin = Coordinate(lon=origin_lon, lat=origin_lat)
            destination = Coordinate(lon=destination_lon, lat=destination_lat)
        except ValidationError as e:
            return f"Error: Invalid origin or destination: {e.errors()[0]['msg']}"

        if threshold_m is None:
            threshold_m = state.params.threshold_m
        elif threshold_m <= 0:
            return "Error: threshold_m must be greater than 0."

        plan = match_route(origin, destination, state.catalog.snapshot(), threshold_m)
        if plan is None:
            return "Error: No route found (single or double)"
        return json.dumps(plan.as_response(), indent=2)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def route_distance(route_id: str, lon: float, lat: float) -> str:
        """Distance in meters from a point to the nearest part of one route.

        Useful for checking why a route was or was not recommended.

        Args:
            route_id: The route's _id.
            lon/lat: The point to measure from (degrees).
        """
        route = state.catalog.get(route_id)
        if route is None:
            return f"Error: Route not found: {route_id}"
        try:
            point = Coordinate(lon=lon, lat=lat)
        except ValidationError as e:
            return f"Error: Invalid point: {e.errors()[0]['msg']}"

        distance = min_distance_to_route(point.as_lonlat(), route.coordinates)
        if math.isinf(distance):
            return f"Route {route.id} has fewer than two points and cannot be matched."
        within = distance <= state.params.threshold_m
        return (
            f"{distance:.1f}m from route {route.id} ({route.name}); "
            f"{'within' if within else 'outside'} the {state.params.threshold_m:.0f}m threshold"
        )

    @mcp.tool()
    def set_match_params(threshold_m: float | None = None) -> str:
        """Set matching parameters used by recommend_route.

        Args:
            threshold_m: Maximum distance in meters between a point and a
                route for the route to serve it (default 300). Applies to
                the origin, the destination and the transfer point.
        """
        p = state.params
        if threshold_m is not None:
            try:
                p.threshold_m = threshold_m
            except ValidationError as e:
                return f"Error: {e.errors()[0]['msg']}"

        return f"Match params: threshold_m={p.threshold_m}"
