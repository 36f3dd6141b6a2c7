"""Pydantic domain models for query points and transit routes."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# (longitude, latitude) in degrees, the order used by GeoJSON and the route files
LonLat = tuple[float, float]


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    lon: float = Field(ge=-180, le=180)
    lat: float = Field(ge=-90, le=90)

    def as_lonlat(self) -> LonLat:
        return (self.lon, self.lat)


class Route(BaseModel):
    """A fixed transit route: identity, labels and an ordered polyline.

    Accepts either a flat ``coordinates`` field or the stored record shape,
    where the polyline sits in a GeoJSON LineString under ``route``. Polylines
    with fewer than two points are kept but never matched.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(alias="_id", min_length=1)
    name: str = Field(min_length=1)
    direction: str = Field(min_length=1)
    district: Optional[str] = None
    coordinates: tuple[LonLat, ...]

    @model_validator(mode="before")
    @classmethod
    def unwrap_record(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        route = data.pop("route", None)
        if "coordinates" not in data and isinstance(route, dict):
            data["coordinates"] = route.get("coordinates")
        for key in ("_id", "id"):
            value = data.get(key)
            # MongoDB extended JSON export
            if isinstance(value, dict) and "$oid" in value:
                data[key] = value["$oid"]
        return data

    @field_validator("coordinates")
    @classmethod
    def coordinates_in_range(cls, v: tuple[LonLat, ...]) -> tuple[LonLat, ...]:
        for i, (lon, lat) in enumerate(v):
            if not -180 <= lon <= 180:
                raise ValueError(f"Point {i} longitude {lon} is outside [-180, 180]")
            if not -90 <= lat <= 90:
                raise ValueError(f"Point {i} latitude {lat} is outside [-90, 90]")
        return v

    def to_record(self) -> dict:
        return {
            "_id": self.id,
            "name": self.name,
            "direction": self.direction,
            "district": self.district,
            "route": {
                "type": "LineString",
                "coordinates": [[lon, lat] for lon, lat in self.coordinates],
            },
        }
