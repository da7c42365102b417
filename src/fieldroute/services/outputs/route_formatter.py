"""Serializers for sequenced routes."""

from __future__ import annotations

import csv
import io

from ..routing.models import SequencedRoute

CSV_FIELDS = [
    "technician_id",
    "sequence",
    "identifier",
    "label",
    "lat",
    "lng",
    "distance_from_prev_km",
    "total_distance_km",
]


def route_to_json(route: SequencedRoute) -> dict:
    return {
        "technician_id": route.technician_id,
        "total_distance_km": route.total_distance_km,
        "stop_count": route.stop_count,
        "metadata": route.metadata,
        "stops": [
            {
                "sequence": route_stop.sequence,
                "identifier": route_stop.stop.identifier,
                "label": route_stop.stop.label,
                "coordinate": {
                    "lat": route_stop.stop.coordinate.lat,
                    "lng": route_stop.stop.coordinate.lng,
                },
                "distance_from_prev_km": route_stop.distance_from_prev_km,
            }
            for route_stop in route.stops
        ],
    }


def route_to_csv(route: SequencedRoute) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS)
    writer.writeheader()
    for route_stop in route.stops:
        writer.writerow(
            {
                "technician_id": route.technician_id,
                "sequence": route_stop.sequence,
                "identifier": route_stop.stop.identifier,
                "label": route_stop.stop.label,
                "lat": route_stop.stop.coordinate.lat,
                "lng": route_stop.stop.coordinate.lng,
                "distance_from_prev_km": route_stop.distance_from_prev_km,
                "total_distance_km": route.total_distance_km,
            }
        )
    return buffer.getvalue()
