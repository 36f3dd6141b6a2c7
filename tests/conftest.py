import pytest

from transit_match.state import state, RouteCatalog, MatchParams


@pytest.fixture(autouse=True)
def fresh_state():
    """Reset the process-wide server state around every test."""
    state.catalog = RouteCatalog()
    state.params = MatchParams()
    state.catalog_path = None
    yield state
    state.catalog = RouteCatalog()
    state.params = MatchParams()
    state.catalog_path = None


@pytest.fixture
def register_tools():
    """Register a tool group against a mock MCP and return the captured tools by name."""
    from unittest.mock import MagicMock

    def _register(register_fn) -> dict:
        tools = {}
        mock_mcp = MagicMock()

        def capture(**kwargs):
            def decorator(fn):
                tools[fn.__name__] = fn
                return fn
            return decorator
        mock_mcp.tool = capture
        register_fn(mock_mcp)
        return tools

    return _register
