"""Pydantic return models for core computation functions."""

from typing import Literal

from pydantic import BaseModel, model_validator

from transit_match.models import Route


class MatchPlan(BaseModel):
    """Return type for the route matchers: one route, or two with a transfer."""
    kind: Literal["single", "double"]
    routes: list[Route]

    @model_validator(mode="after")
    def route_count_matches_kind(self) -> "MatchPlan":
        expected = 1 if self.kind == "single" else 2
        if len(self.routes) != expected:
            raise ValueError(
                f"A {self.kind} plan needs exactly {expected} route(s), got {len(self.routes)}"
            )
        return self

    def as_response(self) -> dict:
        return {"kind": self.kind, "routes": [r.to_record() for r in self.routes]}
