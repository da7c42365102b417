import json
from pathlib import Path

import pytest

from fieldroute.config import settings
from fieldroute.models.domain import Coordinate, Stop
from fieldroute.models.errors import EmptyInputError
from fieldroute.schemas.routing import RouteOptimizationRequest
from fieldroute.services.routing import service as routing_service


def _stop_payload(sid: str, lat: float, lng: float) -> dict:
    return {"identifier": sid, "coordinate": {"lat": lat, "lng": lng}, "label": f"Site {sid}"}


def test_build_sequenced_route_reports_leg_distances():
    stops = [
        Stop("A", Coordinate(0.0, 0.0)),
        Stop("C", Coordinate(0.0, 0.1)),
        Stop("B", Coordinate(0.0, 0.01)),
    ]

    route = routing_service.build_sequenced_route("tech-1", stops)

    assert [rs.stop.identifier for rs in route.stops] == ["A", "B", "C"]
    assert [rs.sequence for rs in route.stops] == [1, 2, 3]
    assert route.stops[0].distance_from_prev_km == 0.0
    assert route.total_distance_km == pytest.approx(sum(rs.distance_from_prev_km for rs in route.stops))
    assert route.total_distance_km == pytest.approx(11.12, abs=0.05)
    assert route.metadata["sequenced_planar_length"] <= route.metadata["input_planar_length"]
    assert route.metadata["map_overlays"]["route"][1] == [0.0, 0.01]


def test_optimize_route_with_inline_stops():
    request = RouteOptimizationRequest(
        technician_id="tech-1",
        stops=[_stop_payload("A", 0, 0), _stop_payload("C", 10, 10), _stop_payload("B", 1, 0)],
    )

    response = routing_service.optimize_route(request)

    assert response.technician_id == "tech-1"
    assert response.stop_count == 3
    assert [stop.identifier for stop in response.stops] == ["A", "B", "C"]
    assert response.metadata["source"] == "request"
    assert "output_dir" not in response.metadata


def test_optimize_route_loads_stops_for_tenant(monkeypatch):
    calls = []

    def fake_fetch(tenant_id, technician_id):
        calls.append((tenant_id, technician_id))
        return [Stop("101", Coordinate(40.71, -74.0)), Stop("102", Coordinate(40.75, -73.98))]

    monkeypatch.setattr(routing_service, "fetch_technician_stops", fake_fetch)

    response = routing_service.optimize_route(
        RouteOptimizationRequest(technician_id="tech-1", tenant_id="tenant-1")
    )

    assert calls == [("tenant-1", "tech-1")]
    assert [stop.identifier for stop in response.stops] == ["101", "102"]
    assert response.metadata["source"] == "database"
    assert response.metadata["tenant_id"] == "tenant-1"


def test_optimize_route_without_open_work_orders_fails(monkeypatch):
    monkeypatch.setattr(routing_service, "fetch_technician_stops", lambda tenant_id, technician_id: [])

    with pytest.raises(ValueError, match="No open work orders"):
        routing_service.optimize_route(RouteOptimizationRequest(technician_id="tech-1", tenant_id="tenant-1"))


def test_optimize_route_with_empty_stop_list_raises():
    with pytest.raises(EmptyInputError):
        routing_service.optimize_route(RouteOptimizationRequest(technician_id="tech-1", stops=[]))


def test_optimize_route_enforces_stop_limit(monkeypatch):
    monkeypatch.setattr(settings, "max_stops_per_route", 2)
    request = RouteOptimizationRequest(
        technician_id="tech-1",
        stops=[_stop_payload(str(i), i, i) for i in range(3)],
    )

    with pytest.raises(ValueError, match="at most 2"):
        routing_service.optimize_route(request)


def test_optimize_route_persists_outputs(monkeypatch, tmp_path: Path):
    original_archive = routing_service.RouteArchive
    monkeypatch.setattr(routing_service, "RouteArchive", lambda: original_archive(root=tmp_path))

    request = RouteOptimizationRequest(
        technician_id="tech-1",
        stops=[_stop_payload("A", 0, 0), _stop_payload("B", 1, 0)],
        persist=True,
        run_label="monday run",
    )
    response = routing_service.optimize_route(request)

    run_dirs = list((tmp_path / "routes").iterdir())
    assert len(run_dirs) == 1
    run_dir = run_dirs[0]
    assert run_dir.name.startswith("monday_run_")
    assert response.metadata["output_dir"] == str(run_dir)

    summary = json.loads((run_dir / "route.json").read_text(encoding="utf-8"))
    assert summary["technician_id"] == "tech-1"
    assert [stop["identifier"] for stop in summary["stops"]] == ["A", "B"]
    csv_lines = (run_dir / "route.csv").read_text(encoding="utf-8").splitlines()
    assert csv_lines[0].startswith("technician_id,sequence,identifier")
    assert len(csv_lines) == 3
