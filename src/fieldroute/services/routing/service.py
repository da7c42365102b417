"""Routing orchestration service."""

from __future__ import annotations

import logging
from typing import Sequence

from ...config import settings
from ...data.work_orders_repository import fetch_technician_stops
from ...models.domain import Stop
from ...persistence.archive import RouteArchive
from ...schemas.routing import (
    CoordinateModel,
    RouteOptimizationRequest,
    RouteResponse,
    SequencedStopModel,
    StopModel,
)
from ..geospatial import coordinate_distance_km
from ..outputs.route_formatter import route_to_csv, route_to_json
from .models import RouteStop, SequencedRoute
from .sequencer import planar_route_length, sequence_stops


def _stop_from_model(model: StopModel) -> Stop:
    return Stop.from_record(model.model_dump())


def build_sequenced_route(technician_id: str, stops: Sequence[Stop]) -> SequencedRoute:
    """Sequence ``stops`` and attach great-circle leg distances for display."""
    ordered = sequence_stops(stops)

    route_stops: list[RouteStop] = []
    total_distance = 0.0
    previous: Stop | None = None
    for sequence, stop in enumerate(ordered, start=1):
        leg_km = coordinate_distance_km(previous.coordinate, stop.coordinate) if previous else 0.0
        total_distance += leg_km
        route_stops.append(RouteStop(stop=stop, sequence=sequence, distance_from_prev_km=leg_km))
        previous = stop

    metadata = {
        "status": "complete",
        "heuristic": "nearest_neighbor",
        "distance_metric": "planar",
        "input_planar_length": planar_route_length(stops),
        "sequenced_planar_length": planar_route_length(ordered),
        "map_overlays": {
            "route": [[stop.coordinate.lat, stop.coordinate.lng] for stop in ordered],
        },
    }
    return SequencedRoute(
        technician_id=technician_id,
        total_distance_km=total_distance,
        stops=route_stops,
        metadata=metadata,
    )


def _to_response(route: SequencedRoute) -> RouteResponse:
    return RouteResponse(
        technician_id=route.technician_id,
        total_distance_km=route.total_distance_km,
        stop_count=route.stop_count,
        metadata=route.metadata,
        stops=[
            SequencedStopModel(
                sequence=route_stop.sequence,
                identifier=route_stop.stop.identifier,
                label=route_stop.stop.label,
                coordinate=CoordinateModel(
                    lat=route_stop.stop.coordinate.lat,
                    lng=route_stop.stop.coordinate.lng,
                ),
                distance_from_prev_km=route_stop.distance_from_prev_km,
            )
            for route_stop in route.stops
        ],
    )


def optimize_route(payload: RouteOptimizationRequest) -> RouteResponse:
    if payload.stops is not None:
        stops = [_stop_from_model(model) for model in payload.stops]
        source = "request"
    else:
        stops = fetch_technician_stops(payload.tenant_id, payload.technician_id)
        source = "database"
        if not stops:
            raise ValueError(
                f"No open work orders with locations found for technician '{payload.technician_id}'."
            )

    if len(stops) > settings.max_stops_per_route:
        raise ValueError(
            f"Route has {len(stops)} stops; at most {settings.max_stops_per_route} can be sequenced per request."
        )

    route = build_sequenced_route(payload.technician_id, stops)
    route.metadata["source"] = source
    if payload.tenant_id:
        route.metadata["tenant_id"] = payload.tenant_id
    if payload.run_label:
        route.metadata["run_label"] = payload.run_label
    logging.info(
        f"Sequenced {route.stop_count} stops for technician '{payload.technician_id}' "
        f"({route.total_distance_km:.2f} km)"
    )

    if payload.persist:
        archive = RouteArchive()
        run_dir = archive.save_run(
            payload.run_label or payload.technician_id,
            route_to_json(route),
            route_to_csv(route),
        )
        route.metadata["output_dir"] = str(run_dir)
        logging.info(f"Archived route run to {run_dir}")

    return _to_response(route)
