"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ...models.domain import Stop


@dataclass(slots=True)
class RouteStop:
    stop: Stop
    sequence: int
    distance_from_prev_km: float


@dataclass(slots=True)
class SequencedRoute:
    technician_id: str
    total_distance_km: float
    stops: List[RouteStop]
    metadata: dict = field(default_factory=dict)

    @property
    def stop_count(self) -> int:
        return len(self.stops)
