"""Status tool: get_status."""

import json
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state


def register_status_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_status() -> str:
        """Return a summary of the route catalog and matching settings.

        catalog.routes: number of routes, in matching order.
        catalog.degenerate_routes: routes with fewer than two points, which
            recommend_route never returns.
        catalog.districts: district labels in first-seen order.
        catalog.path: file last loaded or saved, or null.
        matching.threshold_m: default walking distance used by recommend_route.
        """
        return json.dumps(state.summary(), indent=2)
