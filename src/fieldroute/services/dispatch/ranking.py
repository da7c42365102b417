"""Technician recommendations for an unassigned work order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ...config import settings
from ...models.domain import Technician, WorkOrderLocation
from ..geospatial import coordinate_distance_km


@dataclass(slots=True)
class TechnicianRanking:
    technician: Technician
    distance_km: float
    score: float


def rank_technicians(
    work_order: WorkOrderLocation,
    technicians: Sequence[Technician],
    *,
    load_penalty_km: float | None = None,
    unknown_distance_km: float | None = None,
) -> list[TechnicianRanking]:
    """Order technicians by distance to the job plus a per-active-job penalty.

    Lower scores rank first; equal scores keep the input order.
    """
    penalty = settings.dispatch_load_penalty_km if load_penalty_km is None else load_penalty_km
    fallback = settings.unknown_distance_km if unknown_distance_km is None else unknown_distance_km

    rankings: list[TechnicianRanking] = []
    for technician in technicians:
        if technician.coordinate is None or work_order.coordinate is None:
            distance = fallback
        else:
            distance = coordinate_distance_km(technician.coordinate, work_order.coordinate)
        rankings.append(
            TechnicianRanking(
                technician=technician,
                distance_km=distance,
                score=distance + technician.current_job_count * penalty,
            )
        )
    rankings.sort(key=lambda ranking: ranking.score)
    return rankings
