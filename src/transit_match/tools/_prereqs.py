"""Prerequisite checking helpers for MCP tools."""


def require_state(state, *, routes: bool = False) -> None:
    """Raise ValueError with a descriptive message if required state is not set.

    Usage in a tool:
        try:
            require_state(state, routes=True)
        except ValueError as e:
            return f"Error: {e}"
    """
    if routes and len(state.catalog) == 0:
        raise ValueError(
            "No routes loaded. Load routes first with load_catalog, add_route or import_gpx_route."
        )
