"""Tests for domain and result Pydantic models."""
import pytest
from pydantic import ValidationError


class TestCoordinate:
    def test_valid_coordinate(self):
        from transit_match.models import Coordinate
        c = Coordinate(lon=121.05, lat=14.65)
        assert c.as_lonlat() == (121.05, 14.65)

    def test_lat_out_of_range(self):
        from transit_match.models import Coordinate
        with pytest.raises(ValidationError):
            Coordinate(lon=0.0, lat=91.0)

    def test_lon_out_of_range(self):
        from transit_match.models import Coordinate
        with pytest.raises(ValidationError):
            Coordinate(lon=-181.0, lat=0.0)

    def test_non_numeric_rejected(self):
        from transit_match.models import Coordinate
        with pytest.raises(ValidationError):
            Coordinate(lon="east", lat=0.0)

    def test_frozen(self):
        from transit_match.models import Coordinate
        c = Coordinate(lon=1.0, lat=2.0)
        with pytest.raises(ValidationError):
            c.lat = 3.0


class TestRoute:
    RECORD = {
        "_id": {"$oid": "66a1f0c2e4b0a1b2c3d4e5f6"},
        "name": "Cubao - Fairview",
        "direction": "Northbound",
        "district": "Quezon City",
        "route": {
            "type": "LineString",
            "coordinates": [[121.0524, 14.6197], [121.0614, 14.6509], [121.0747, 14.7011]],
        },
    }

    def test_from_record_shape(self):
        from transit_match.models import Route
        r = Route.model_validate(self.RECORD)
        assert r.id == "66a1f0c2e4b0a1b2c3d4e5f6"
        assert r.district == "Quezon City"
        assert r.coordinates[0] == (121.0524, 14.6197)
        assert len(r.coordinates) == 3

    def test_flat_fields(self):
        from transit_match.models import Route
        r = Route(id="r1", name="Loop", direction="CW", coordinates=[[0.0, 0.0], [0.0, 1.0]])
        assert r.district is None
        assert r.coordinates == ((0.0, 0.0), (0.0, 1.0))

    def test_to_record_round_trip(self):
        from transit_match.models import Route
        r = Route.model_validate(self.RECORD)
        record = r.to_record()
        assert record["_id"] == r.id
        assert record["route"]["type"] == "LineString"
        assert Route.model_validate(record) == r

    def test_empty_polyline_is_kept(self):
        from transit_match.models import Route
        r = Route(id="r1", name="Empty", direction="N", coordinates=[])
        assert r.coordinates == ()
        assert r.to_record()["route"]["coordinates"] == []

    def test_polyline_is_immutable(self):
        from transit_match.models import Route
        r = Route(id="r1", name="Loop", direction="CW", coordinates=[[0.0, 0.0], [0.0, 1.0]])
        assert isinstance(r.coordinates, tuple)
        with pytest.raises(AttributeError):
            r.coordinates.append((1.0, 1.0))

    def test_single_point_allowed(self):
        from transit_match.models import Route
        r = Route(id="r1", name="Stop", direction="N", coordinates=[[0.0, 0.0]])
        assert len(r.coordinates) == 1

    def test_point_out_of_range(self):
        from transit_match.models import Route
        with pytest.raises(ValidationError, match="latitude"):
            Route(id="r1", name="Bad", direction="N", coordinates=[[0.0, 0.0], [0.0, 95.0]])

    def test_name_required(self):
        from transit_match.models import Route
        with pytest.raises(ValidationError):
            Route(id="r1", name="", direction="N", coordinates=[[0.0, 0.0]])

    def test_missing_polyline(self):
        from transit_match.models import Route
        record = {k: v for k, v in self.RECORD.items() if k != "route"}
        with pytest.raises(ValidationError):
            Route.model_validate(record)


class TestMatchPlan:
    def _route(self, route_id):
        from transit_match.models import Route
        return Route(id=route_id, name=route_id, direction="N", coordinates=[[0.0, 0.0], [0.0, 1.0]])

    def test_single_plan(self):
        from transit_match.core.models import MatchPlan
        plan = MatchPlan(kind="single", routes=[self._route("a")])
        assert plan.as_response()["routes"][0]["_id"] == "a"

    def test_double_plan_needs_two_routes(self):
        from transit_match.core.models import MatchPlan
        with pytest.raises(ValidationError, match="exactly 2"):
            MatchPlan(kind="double", routes=[self._route("a")])

    def test_unknown_kind(self):
        from transit_match.core.models import MatchPlan
        with pytest.raises(ValidationError):
            MatchPlan(kind="triple", routes=[self._route("a")])
