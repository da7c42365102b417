"""Tenant-scoped work order and technician queries against Supabase.

Every query filters on ``tenant_id`` explicitly. Row-level security in the
database is still the authority; the filter keeps results scoped even when the
service role key bypasses it.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from ..config import settings
from ..db.supabase import require_supabase_client
from ..models.domain import Coordinate, Stop, Technician, WorkOrderLocation
from ..models.errors import InvalidStopError

WORK_ORDER_COLUMNS = "id, reference, address, lat, lng, status, scheduled_at, technician_id"
TECHNICIAN_COLUMNS = "id, full_name, lat, lng, current_job_count"


def _to_work_order(row: dict[str, Any]) -> WorkOrderLocation:
    return WorkOrderLocation(
        work_order_id=str(row["id"]),
        reference=str(row.get("reference") or f"WO-{row['id']}"),
        address=str(row.get("address") or ""),
        coordinate=Coordinate.from_optional(row.get("lat"), row.get("lng")),
        status=row.get("status"),
    )


def _to_technician(row: dict[str, Any]) -> Technician:
    return Technician(
        technician_id=str(row["id"]),
        name=str(row.get("full_name") or row["id"]),
        coordinate=Coordinate.from_optional(row.get("lat"), row.get("lng")),
        current_job_count=int(row.get("current_job_count") or 0),
    )


def fetch_technician_stops(
    tenant_id: str,
    technician_id: str,
    *,
    statuses: Sequence[str] | None = None,
) -> list[Stop]:
    """Load the technician's open work orders as stops, in scheduled order.

    Raises:
        InvalidStopError: a work order has no usable coordinates. The whole
            list is rejected rather than routing around the bad row.
        ValueError: the technician has more open work orders than
            ``settings.max_stops_per_route``; no partial route is returned.
    """
    supabase = require_supabase_client()
    active_statuses = list(statuses or settings.active_work_order_statuses)
    max_stops = settings.max_stops_per_route
    response = (
        supabase.table("work_orders")
        .select(WORK_ORDER_COLUMNS)
        .eq("tenant_id", tenant_id)
        .eq("technician_id", technician_id)
        .in_("status", active_statuses)
        .order("scheduled_at")
        .limit(max_stops + 1)
        .execute()
    )
    rows = response.data or []
    logging.info(f"Fetched {len(rows)} open work orders for technician '{technician_id}'")
    if len(rows) > max_stops:
        logging.warning(f"Technician '{technician_id}' has more than {max_stops} open work orders")
        raise ValueError(
            f"Route has more than {max_stops} stops; at most {max_stops} can be sequenced per request."
        )

    stops: list[Stop] = []
    for row in rows:
        try:
            stops.append(Stop.from_record(row))
        except InvalidStopError as exc:
            logging.warning(f"Work order {row.get('id')} cannot be routed: {exc}")
            raise
    return stops


def fetch_technicians(tenant_id: str) -> list[Technician]:
    supabase = require_supabase_client()
    response = (
        supabase.table("technicians")
        .select(TECHNICIAN_COLUMNS)
        .eq("tenant_id", tenant_id)
        .execute()
    )
    technicians: list[Technician] = []
    for row in response.data or []:
        try:
            technicians.append(_to_technician(row))
        except (KeyError, ValueError, TypeError) as e:
            logging.warning(f"Skipping invalid technician row: {e}")
    return technicians


def fetch_unassigned_work_orders(tenant_id: str, *, limit: int | None = None) -> list[WorkOrderLocation]:
    supabase = require_supabase_client()
    response = (
        supabase.table("work_orders")
        .select(WORK_ORDER_COLUMNS)
        .eq("tenant_id", tenant_id)
        .is_("technician_id", "null")
        .order("id", desc=True)
        .limit(limit or settings.work_order_fetch_limit)
        .execute()
    )
    work_orders: list[WorkOrderLocation] = []
    for row in response.data or []:
        try:
            work_orders.append(_to_work_order(row))
        except (KeyError, ValueError, TypeError) as e:
            logging.warning(f"Skipping invalid work order row: {e}")
    return work_orders


def get_work_order(tenant_id: str, work_order_id: str) -> WorkOrderLocation | None:
    supabase = require_supabase_client()
    response = (
        supabase.table("work_orders")
        .select(WORK_ORDER_COLUMNS)
        .eq("tenant_id", tenant_id)
        .eq("id", work_order_id)
        .limit(1)
        .execute()
    )
    rows = response.data or []
    return _to_work_order(rows[0]) if rows else None


def assign_work_order(tenant_id: str, work_order_id: str, technician_id: str) -> bool:
    """Assign the work order to a technician and mark it scheduled.

    Returns False when no row in the tenant matched ``work_order_id``.
    """
    supabase = require_supabase_client()
    response = (
        supabase.table("work_orders")
        .update({"technician_id": technician_id, "status": "scheduled"})
        .eq("tenant_id", tenant_id)
        .eq("id", work_order_id)
        .execute()
    )
    updated = bool(response.data)
    if updated:
        logging.info(f"Assigned work order {work_order_id} to technician {technician_id}")
    return updated
