"""Route catalog tools: list_routes, get_route, add_route, update_route, delete_route."""

import json

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import state, new_route_id
from ..models import Route


def _format_validation_error(e: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'route'}: {err['msg']}" for err in e.errors()
    )


def register_route_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def list_routes(district: str | None = None) -> str:
        """List the routes in the catalog, in matching order.

        **Next:** get_route for full details, or recommend_route to plan a trip.

        Args:
            district: Only list routes in this district (case-insensitive).
        """
        routes = state.catalog.snapshot()
        if district is not None:
            wanted = district.strip().lower()
            routes = [r for r in routes if r.district and r.district.lower() == wanted]
        return json.dumps(
            [
                {
                    "_id": r.id,
                    "name": r.name,
                    "direction": r.direction,
                    "district": r.district,
                    "points": len(r.coordinates),
                }
                for r in routes
            ],
            indent=2,
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_route(route_id: str) -> str:
        """Return one route record, including its full polyline.

        Args:
            route_id: The route's _id.
        """
        route = state.catalog.get(route_id)
        if route is None:
            return f"Error: Route not found: {route_id}"
        return json.dumps(route.to_record(), indent=2)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def add_route(
        name: str,
        direction: str,
        coordinates: list[list[float]],
        district: str | None = None,
    ) -> str:
        """Add a route to the end of the catalog.

        Routes are matched in catalog order, so earlier routes win ties.
        **Next:** save_catalog to keep the change across restarts.

        Args:
            name: Display name, e.g. "Cubao - Fairview".
            direction: Direction label, e.g. "Northbound".
            coordinates: Polyline as [[lon, lat], ...] in degrees. A route
                needs at least two points to ever be matched.
            district: Optional district or zone label.
        """
        try:
            route = Route(
                id=new_route_id(),
                name=name,
                direction=direction,
                district=district,
                coordinates=coordinates,
            )
        except ValidationError as e:
            return f"Error: Invalid route data: {_format_validation_error(e)}"

        state.catalog.add(route)
        warning = ""
        if len(route.coordinates) < 2:
            warning = " Warning: a route with fewer than two points is never matched."
        return f"Route added: {route.id} ({route.name}, {len(route.coordinates)} points).{warning}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def update_route(
        route_id: str,
        name: str | None = None,
        direction: str | None = None,
        district: str | None = None,
        coordinates: list[list[float]] | None = None,
    ) -> str:
        """Change fields of an existing route. Omitted fields are left as they are.

        Args:
            route_id: The route's _id.
            name/direction/district: New labels. Pass district="" to clear it.
            coordinates: New polyline as [[lon, lat], ...].
        """
        changes = {
            k: v for k, v in {
                "name": name,
                "direction": direction,
                "district": district,
                "coordinates": coordinates,
            }.items() if v is not None
        }
        if district is not None and not district.strip():
            changes["district"] = None
        if not changes:
            return "Error: Nothing to update. Provide at least one field."

        try:
            route = state.catalog.update(route_id, **changes)
        except KeyError:
            return f"Error: Route not found: {route_id}"
        except ValidationError as e:
            return f"Error: Invalid route data: {_format_validation_error(e)}"

        return f"Route updated: {route.id} ({', '.join(sorted(changes))})"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def delete_route(route_id: str) -> str:
        """Remove a route from the catalog.

        Args:
            route_id: The route's _id.
        """
        try:
            route = state.catalog.delete(route_id)
        except KeyError:
            return f"Error: Route not found: {route_id}"
        return f"Route deleted: {route.id} ({route.name})"
