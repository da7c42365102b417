"""Domain models for stops, technicians and work order locations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from numbers import Real
from typing import Any, Mapping, Optional

from .errors import InvalidStopError


def _coerce_degree(value: Any, axis: str, identifier: str | None = None) -> float:
    where = f" for stop '{identifier}'" if identifier is not None else ""
    if value is None:
        raise InvalidStopError(f"Missing {axis}{where}.")
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal, str)):
        raise InvalidStopError(f"Non-numeric {axis}{where}: {value!r}")
    try:
        number = float(value)
    except (ValueError, OverflowError) as exc:
        raise InvalidStopError(f"Non-numeric {axis}{where}: {value!r}") from exc
    if not math.isfinite(number):
        raise InvalidStopError(f"{axis} is not a finite number{where}: {value!r}")
    return number


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Latitude/longitude pair treated as planar x/y by the sequencer."""

    lat: float
    lng: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "lat", _coerce_degree(self.lat, "latitude"))
        object.__setattr__(self, "lng", _coerce_degree(self.lng, "longitude"))

    @classmethod
    def from_optional(cls, lat: Any, lng: Any) -> Optional["Coordinate"]:
        """Build a coordinate, or return None when either value is absent or unusable."""
        try:
            return cls(lat, lng)
        except InvalidStopError:
            return None


@dataclass(frozen=True, slots=True)
class Stop:
    """A location a technician must visit, tied to the originating work order."""

    identifier: str
    coordinate: Coordinate
    label: str = ""

    def __post_init__(self) -> None:
        if self.identifier is None or str(self.identifier).strip() == "":
            raise InvalidStopError("Stop is missing an identifier.")
        object.__setattr__(self, "identifier", str(self.identifier))
        if not isinstance(self.coordinate, Coordinate):
            raise InvalidStopError(f"Stop '{self.identifier}' has no coordinate.")

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Stop":
        """Build a stop from either the nested API shape or a flat work order row.

        Accepts ``{"identifier", "coordinate": {"lat", "lng"}, "label"}`` as well as
        rows such as ``{"id", "lat", "lng", "address", "reference"}``.
        """
        identifier = record.get("identifier", record.get("id"))
        if identifier is None or str(identifier).strip() == "":
            raise InvalidStopError(f"Stop record has no identifier: {dict(record)!r}")
        identifier = str(identifier)

        coordinate = record.get("coordinate")
        if isinstance(coordinate, Mapping):
            lat, lng = coordinate.get("lat"), coordinate.get("lng")
        elif coordinate is None:
            lat, lng = record.get("lat"), record.get("lng")
        else:
            raise InvalidStopError(f"Stop '{identifier}' has a malformed coordinate: {coordinate!r}")

        label = record.get("label") or record.get("address") or record.get("reference") or ""
        return cls(
            identifier=identifier,
            coordinate=Coordinate(
                _coerce_degree(lat, "latitude", identifier),
                _coerce_degree(lng, "longitude", identifier),
            ),
            label=str(label),
        )


@dataclass(slots=True)
class Technician:
    """A field technician with their last known position and workload."""

    technician_id: str
    name: str
    coordinate: Optional[Coordinate]
    current_job_count: int = 0


@dataclass(slots=True)
class WorkOrderLocation:
    """An unassigned or scheduled work order with its site location."""

    work_order_id: str
    reference: str
    address: str
    coordinate: Optional[Coordinate]
    status: Optional[str] = None
