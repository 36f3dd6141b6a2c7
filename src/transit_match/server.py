"""MCP server for transit-match.

Registers all tools and runs via stdio transport.
"""

import json
import logging
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from mcp.server.fastmcp import FastMCP

from .state import state
from .tools.routes import register_route_tools
from .tools.match import register_match_tools
from .tools.catalog import register_catalog_tools
from .tools.status import register_status_tools

logger = logging.getLogger(__name__)

CATALOG_ENV_VAR = "TRANSIT_MATCH_CATALOG"

mcp = FastMCP(
    "transit-match",
    instructions=(
        "Match a rider's origin and destination against fixed transit routes, "
        "with single-route rides or a single transfer between two routes"
    ),
)

# Register all tool groups
register_route_tools(mcp)
register_match_tools(mcp)
register_catalog_tools(mcp)
register_status_tools(mcp)


@mcp.resource("state://catalog")
def catalog_resource() -> str:
    """Summary of the loaded route catalog and matching parameters."""
    return json.dumps(state.summary(), indent=2)


def load_initial_catalog() -> None:
    # A .env in the working directory fills in variables not already set
    load_dotenv(find_dotenv(usecwd=True))
    path = os.getenv(CATALOG_ENV_VAR)
    if not path:
        return
    catalog_path = Path(path).expanduser()
    skipped = state.catalog.load(catalog_path)
    state.catalog_path = catalog_path
    if skipped:
        logger.warning("%d malformed record(s) skipped in %s", skipped, catalog_path)


def main():
    load_initial_catalog()
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
