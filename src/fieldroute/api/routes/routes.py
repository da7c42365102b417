"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.routing import RouteOptimizationRequest, RouteResponse
from ...services.routing.service import optimize_route

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/optimize", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def optimize(payload: RouteOptimizationRequest) -> RouteResponse:
    try:
        return optimize_route(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error sequencing route for technician '{payload.technician_id}': {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}"
        ) from exc
