"""Dispatch orchestration: load candidates for a work order and rank them."""

from __future__ import annotations

from ...data.work_orders_repository import fetch_technicians, get_work_order
from ...models.domain import WorkOrderLocation
from ...schemas.dispatch import (
    RecommendationsResponse,
    TechnicianRecommendationModel,
    WorkOrderLocationModel,
)
from ...schemas.routing import CoordinateModel
from .ranking import rank_technicians


def work_order_to_model(work_order: WorkOrderLocation) -> WorkOrderLocationModel:
    coordinate = work_order.coordinate
    return WorkOrderLocationModel(
        work_order_id=work_order.work_order_id,
        reference=work_order.reference,
        address=work_order.address,
        coordinate=CoordinateModel(lat=coordinate.lat, lng=coordinate.lng) if coordinate else None,
        status=work_order.status,
    )


def recommend_technicians(tenant_id: str, work_order_id: str) -> RecommendationsResponse | None:
    """Rank the tenant's technicians for a work order, or None if the work order does not exist."""
    work_order = get_work_order(tenant_id, work_order_id)
    if work_order is None:
        return None

    rankings = rank_technicians(work_order, fetch_technicians(tenant_id))
    return RecommendationsResponse(
        work_order=work_order_to_model(work_order),
        recommendations=[
            TechnicianRecommendationModel(
                technician_id=ranking.technician.technician_id,
                name=ranking.technician.name,
                current_job_count=ranking.technician.current_job_count,
                distance_km=ranking.distance_km,
                score=ranking.score,
                best_match=index == 0,
            )
            for index, ranking in enumerate(rankings)
        ],
    )
