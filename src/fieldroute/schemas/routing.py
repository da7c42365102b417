"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class CoordinateModel(BaseModel):
    lat: float
    lng: float


class StopModel(BaseModel):
    identifier: str = Field(..., min_length=1, description="Originating work order reference.")
    coordinate: CoordinateModel
    label: str = Field(default="", description="Address or reference shown to the technician.")


class RouteOptimizationRequest(BaseModel):
    technician_id: str
    tenant_id: Optional[str] = Field(
        default=None,
        description="Tenant whose work orders are loaded when `stops` is omitted.",
    )
    stops: Optional[List[StopModel]] = Field(
        default=None,
        description="Stops to sequence. The first stop is the fixed starting point.",
    )
    persist: bool = False
    run_label: Optional[str] = Field(default=None, description="Friendly name for persisted outputs.")

    @field_validator("stops")
    @classmethod
    def _unique_identifiers(cls, stops: Optional[List[StopModel]]) -> Optional[List[StopModel]]:
        if stops is None:
            return stops
        seen: set[str] = set()
        for stop in stops:
            if stop.identifier in seen:
                raise ValueError(f"Duplicate stop identifier '{stop.identifier}'")
            seen.add(stop.identifier)
        return stops

    @model_validator(mode="after")
    def _stops_or_tenant(self) -> "RouteOptimizationRequest":
        if self.stops is None and not self.tenant_id:
            raise ValueError("Provide either `stops` or `tenant_id` to load the technician's work orders.")
        return self


class SequencedStopModel(BaseModel):
    sequence: int
    identifier: str
    label: str
    coordinate: CoordinateModel
    distance_from_prev_km: float


class RouteResponse(BaseModel):
    technician_id: str
    total_distance_km: float
    stop_count: int
    metadata: dict
    stops: List[SequencedStopModel]
