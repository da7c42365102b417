"""Dispatch endpoints: unassigned work orders, technician recommendations, assignment."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from ...data.work_orders_repository import assign_work_order, fetch_unassigned_work_orders
from ...schemas.dispatch import AssignWorkOrderRequest, RecommendationsResponse, WorkOrderLocationModel
from ...services.dispatch.service import recommend_technicians, work_order_to_model

router = APIRouter(prefix="/dispatch", tags=["dispatch"])


@router.get("/work-orders/unassigned", response_model=List[WorkOrderLocationModel])
def list_unassigned(
    tenant_id: str = Query(..., description="Tenant owning the work orders"),
) -> List[WorkOrderLocationModel]:
    try:
        return [work_order_to_model(work_order) for work_order in fetch_unassigned_work_orders(tenant_id)]
    except Exception as exc:
        logging.exception(f"Error loading unassigned work orders: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to load unassigned work orders: {str(exc)}"
        ) from exc


@router.get("/work-orders/{work_order_id}/recommendations", response_model=RecommendationsResponse)
def recommendations(
    work_order_id: str,
    tenant_id: str = Query(..., description="Tenant owning the work order"),
) -> RecommendationsResponse:
    try:
        response = recommend_technicians(tenant_id, work_order_id)
    except Exception as exc:
        logging.exception(f"Error ranking technicians for work order {work_order_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to rank technicians: {str(exc)}"
        ) from exc
    if response is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Work order {work_order_id} not found"
        )
    return response


@router.post("/assign", status_code=status.HTTP_200_OK)
def assign(payload: AssignWorkOrderRequest) -> dict:
    """Assign a work order to a technician."""
    try:
        success = assign_work_order(
            tenant_id=payload.tenant_id,
            work_order_id=payload.work_order_id,
            technician_id=payload.technician_id,
        )
    except Exception as exc:
        logging.exception(f"Error assigning work order: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to assign work order: {str(exc)}"
        ) from exc
    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Work order {payload.work_order_id} not found"
        )
    return {
        "success": True,
        "message": f"Work order {payload.work_order_id} assigned to technician {payload.technician_id}"
    }
