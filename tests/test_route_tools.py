"""Tests for route catalog tools."""
import json

import pytest

from transit_match.state import state
from transit_match.models import Route


@pytest.fixture
def tools(register_tools):
    from transit_match.tools.routes import register_route_tools
    return register_tools(register_route_tools)


def _seed():
    state.catalog.add(Route(
        id="r1", name="Cubao - Fairview", direction="Northbound", district="Quezon City",
        coordinates=[(121.05, 14.62), (121.06, 14.65)],
    ))
    state.catalog.add(Route(
        id="r2", name="Baclaran - Lawton", direction="Northbound", district="Manila",
        coordinates=[(120.99, 14.53), (120.98, 14.59)],
    ))


def test_list_routes(tools):
    _seed()
    listed = json.loads(tools["list_routes"]())
    assert [r["_id"] for r in listed] == ["r1", "r2"]
    assert listed[0]["points"] == 2


def test_list_routes_by_district_is_case_insensitive(tools):
    _seed()
    listed = json.loads(tools["list_routes"](district="manila"))
    assert [r["_id"] for r in listed] == ["r2"]


def test_get_route(tools):
    _seed()
    record = json.loads(tools["get_route"]("r1"))
    assert record["name"] == "Cubao - Fairview"
    assert record["route"]["coordinates"] == [[121.05, 14.62], [121.06, 14.65]]


def test_get_route_not_found(tools):
    assert tools["get_route"]("nope").startswith("Error: Route not found")


def test_add_route(tools):
    result = tools["add_route"](
        name="Loop", direction="Clockwise", coordinates=[[121.0, 14.6], [121.01, 14.6]],
    )
    assert result.startswith("Route added")
    assert len(state.catalog) == 1
    route = state.catalog.snapshot()[0]
    assert route.id in result
    assert route.district is None


def test_add_route_invalid_data(tools):
    result = tools["add_route"](name="", direction="N", coordinates=[[0.0, 0.0]])
    assert result.startswith("Error: Invalid route data")
    assert len(state.catalog) == 0


def test_add_single_point_route_warns(tools):
    result = tools["add_route"](name="Stop", direction="N", coordinates=[[0.0, 0.0]])
    assert "never matched" in result
    assert len(state.catalog) == 1


def test_update_route(tools):
    _seed()
    result = tools["update_route"]("r1", direction="Southbound")
    assert result.startswith("Route updated")
    assert state.catalog.get("r1").direction == "Southbound"
    assert state.catalog.get("r1").name == "Cubao - Fairview"


def test_update_route_requires_a_field(tools):
    _seed()
    assert tools["update_route"]("r1").startswith("Error: Nothing to update")


def test_update_route_not_found(tools):
    assert tools["update_route"]("nope", name="x").startswith("Error: Route not found")


def test_update_route_invalid_coordinates(tools):
    _seed()
    result = tools["update_route"]("r1", coordinates=[[0.0, 100.0], [0.0, 0.0]])
    assert result.startswith("Error: Invalid route data")
    assert state.catalog.get("r1").coordinates[0] == (121.05, 14.62)


def test_delete_route(tools):
    _seed()
    assert tools["delete_route"]("r1").startswith("Route deleted")
    assert state.catalog.get("r1") is None
    assert tools["delete_route"]("r1").startswith("Error: Route not found")


def test_update_route_clears_district_with_empty_string(tools):
    _seed()
    result = tools["update_route"]("r1", district="")
    assert result.startswith("Route updated")
    assert state.catalog.get("r1").district is None
    assert state.catalog.get("r1").name == "Cubao - Fairview"
