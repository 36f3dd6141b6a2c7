"""Catalog file tools: load_catalog, save_catalog, import_gpx_route."""

import json
import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import state, new_route_id
from ..models import Route
from ..core.gpx import parse_gpx_route

logger = logging.getLogger(__name__)


def _default_path() -> Path:
    return Path.home() / ".cache" / "transit-match" / "routes.json"


def register_catalog_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def load_catalog(path: str | None = None) -> str:
        """Replace the route catalog with the routes in a JSON file.

        The file is a JSON array of route records:
        {"_id", "name", "direction", "district", "route": {"type": "LineString",
        "coordinates": [[lon, lat], ...]}}. Malformed records are skipped.
        **Next:** list_routes or recommend_route.

        Args:
            path: File to load. Default: ~/.cache/transit-match/routes.json
        """
        load_path = Path(path) if path else _default_path()

        if not load_path.exists():
            return f"Error: Catalog file not found at {load_path}"

        try:
            skipped = state.catalog.load(load_path)
        except json.JSONDecodeError as e:
            return f"Error: Invalid catalog file: {e}"
        except ValueError as e:
            return f"Error: {e}"

        state.catalog_path = load_path
        message = f"Catalog loaded from {load_path}: {len(state.catalog)} route(s)"
        if skipped:
            message += f", {skipped} malformed record(s) skipped (see server logs)"
        return message

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def save_catalog(path: str | None = None) -> str:
        """Save the route catalog to a JSON file in the format load_catalog reads.

        Args:
            path: Where to save. Default: the file last loaded, otherwise
                ~/.cache/transit-match/routes.json
        """
        save_path = Path(path) if path else (state.catalog_path or _default_path())
        state.catalog.save(save_path)
        state.catalog_path = save_path
        return f"Catalog saved to {save_path}: {len(state.catalog)} route(s)"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def import_gpx_route(
        file_path: str,
        direction: str,
        name: str | None = None,
        district: str | None = None,
    ) -> str:
        """Add a route whose polyline is the track recorded in a GPX file.

        All track points are joined in file order into one polyline.
        **Next:** save_catalog to keep the route across restarts.

        Args:
            file_path: Absolute path to a .gpx file.
            direction: Direction label for the new route.
            name: Display name. Default: the GPX track name.
            district: Optional district or zone label.
        """
        gpx_path = Path(file_path)
        if not gpx_path.exists():
            return f"Error: GPX file not found at {gpx_path}"

        gpx_data = parse_gpx_route(str(gpx_path))
        if not gpx_data["coordinates"]:
            return "Error: GPX file has no track or route points."

        try:
            route = Route(
                id=new_route_id(),
                name=name or gpx_data["name"] or gpx_path.stem,
                direction=direction,
                district=district,
                coordinates=gpx_data["coordinates"],
            )
        except ValidationError as e:
            return f"Error: Invalid route data: {e.errors()[0]['msg']}"

        state.catalog.add(route)
        logger.info("Imported route %s from %s", route.id, gpx_path)
        return (
            f"GPX route added: {route.id} ({route.name}, {len(route.coordinates)} points)"
        )
