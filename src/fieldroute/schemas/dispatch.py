"""Dispatch API schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from .routing import CoordinateModel


class WorkOrderLocationModel(BaseModel):
    work_order_id: str
    reference: str
    address: str
    coordinate: Optional[CoordinateModel] = None
    status: Optional[str] = None


class TechnicianRecommendationModel(BaseModel):
    technician_id: str
    name: str
    current_job_count: int
    distance_km: float
    score: float
    best_match: bool = False


class RecommendationsResponse(BaseModel):
    work_order: WorkOrderLocationModel
    recommendations: List[TechnicianRecommendationModel]


class AssignWorkOrderRequest(BaseModel):
    tenant_id: str
    work_order_id: str
    technician_id: str
