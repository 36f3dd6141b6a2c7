"""Server state for the transit-match MCP server.

Holds the route catalog and the matching parameters. The catalog is
copy-on-write: every mutation swaps in a new tuple under a lock, so a
snapshot taken for a match never changes underneath it.
"""

import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from transit_match.core.matcher import DEFAULT_THRESHOLD_M
from transit_match.models import Route

logger = logging.getLogger(__name__)


class MatchParams(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    threshold_m: float = Field(default=DEFAULT_THRESHOLD_M, gt=0)


def new_route_id() -> str:
    return uuid.uuid4().hex


class RouteCatalog:
    """Ordered, thread-safe collection of routes keyed by id."""

    def __init__(self, routes=()):
        self._lock = threading.Lock()
        self._routes: tuple[Route, ...] = tuple(routes)

    def __len__(self) -> int:
        return len(self._routes)

    def snapshot(self) -> tuple[Route, ...]:
        return self._routes

    def get(self, route_id: str) -> Optional[Route]:
        for route in self._routes:
            if route.id == route_id:
                return route
        return None

    def districts(self) -> list[str]:
        seen = []
        for route in self._routes:
            if route.district and route.district not in seen:
                seen.append(route.district)
        return seen

    def add(self, route: Route) -> Route:
        with self._lock:
            if any(r.id == route.id for r in self._routes):
                raise ValueError(f"Route id already exists: {route.id}")
            self._routes = self._routes + (route,)
        logger.info("Added route %s (%s)", route.id, route.name)
        return route

    def update(self, route_id: str, **changes) -> Route:
        """Apply a partial update and revalidate. The id cannot change."""
        changes.pop("id", None)
        changes.pop("_id", None)
        with self._lock:
            for i, route in enumerate(self._routes):
                if route.id == route_id:
                    updated = Route.model_validate({**route.model_dump(), **changes})
                    self._routes = self._routes[:i] + (updated,) + self._routes[i + 1:]
                    break
            else:
                raise KeyError(route_id)
        logger.info("Updated route %s: %s", route_id, sorted(changes))
        return updated

    def delete(self, route_id: str) -> Route:
        with self._lock:
            for i, route in enumerate(self._routes):
                if route.id == route_id:
                    self._routes = self._routes[:i] + self._routes[i + 1:]
                    break
            else:
                raise KeyError(route_id)
        logger.info("Deleted route %s", route_id)
        return route

    def replace(self, routes) -> None:
        routes = tuple(routes)
        ids = [r.id for r in routes]
        if len(ids) != len(set(ids)):
            raise ValueError("Route ids must be unique")
        with self._lock:
            self._routes = routes

    def load(self, path: Path) -> int:
        """Replace the catalog with the records in a JSON file.

        Malformed records are skipped with a warning. Returns the number of
        records skipped.
        """
        with open(path) as f:
            records = json.load(f)
        if not isinstance(records, list):
            raise ValueError(f"{path} must contain a JSON array of route records")

        routes = []
        seen = set()
        skipped = 0
        for i, record in enumerate(records):
            try:
                route = Route.model_validate(record)
            except ValidationError as e:
                logger.warning("Skipping route record %d in %s: %s", i, path, e.errors()[0]["msg"])
                skipped += 1
                continue
            if route.id in seen:
                logger.warning("Skipping route record %d in %s: duplicate id %s", i, path, route.id)
                skipped += 1
                continue
            seen.add(route.id)
            routes.append(route)

        self.replace(routes)
        logger.info("Loaded %d route(s) from %s", len(routes), path)
        return skipped

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump([r.to_record() for r in self.snapshot()], f, indent=2)
        logger.info("Saved %d route(s) to %s", len(self), path)


class ServerState:
    def __init__(self):
        self.catalog = RouteCatalog()
        self.params = MatchParams()
        self.catalog_path: Optional[Path] = None

    def summary(self) -> dict:
        routes = self.catalog.snapshot()
        return {
            "catalog": {
                "routes": len(routes),
                "degenerate_routes": sum(1 for r in routes if len(r.coordinates) < 2),
                "districts": self.catalog.districts(),
                "path": str(self.catalog_path) if self.catalog_path else None,
            },
            "matching": {
                "threshold_m": self.params.threshold_m,
            },
        }


# Global server state, one per MCP server process
state = ServerState()
