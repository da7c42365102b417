"""Greedy nearest-neighbour visit ordering for a technician's stops.

The first stop is the fixed start. From there the route repeatedly moves to the
closest unvisited stop, measured as planar distance over raw latitude/longitude
degrees. This is a local heuristic for small daily stop lists (tens of stops):
it costs O(n^2) distance evaluations, gives no optimality guarantee, and knows
nothing about the road network.

Equidistant candidates are resolved in favour of the one that appears first in
the input. The candidate pool keeps input order throughout, so the result is
fully determined by the input sequence. Earlier versions of this routine
re-sorted the pool by distance at every step, so their ties fell to whichever
candidate was closest to a previously visited stop; results can differ from
those versions only when two candidates are exactly equidistant.
"""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Coordinate, Stop
from ...models.errors import EmptyInputError, InvalidStopError
from ..geospatial import planar_distance

__all__ = ["EmptyInputError", "InvalidStopError", "planar_route_length", "sequence_stops"]


def _validate(stops: Sequence[Stop]) -> None:
    for position, stop in enumerate(stops):
        if not isinstance(stop, Stop):
            raise InvalidStopError(f"Item {position} is not a Stop: {stop!r}")
        if not isinstance(stop.coordinate, Coordinate):
            raise InvalidStopError(f"Stop '{stop.identifier}' has no coordinate.")


def sequence_stops(stops: Sequence[Stop]) -> list[Stop]:
    """Return ``stops`` reordered by nearest-neighbour construction from ``stops[0]``.

    Raises:
        EmptyInputError: ``stops`` is empty.
        InvalidStopError: any element is not a valid Stop. Nothing is sequenced.
    """
    if len(stops) == 0:
        raise EmptyInputError("Cannot sequence an empty stop list: there is no starting stop.")
    _validate(stops)
    if len(stops) < 2:
        return list(stops)

    current = stops[0]
    ordered = [current]
    remaining = list(stops[1:])

    while remaining:
        nearest_index = 0
        nearest_distance = planar_distance(current.coordinate, remaining[0].coordinate)
        for index in range(1, len(remaining)):
            distance = planar_distance(current.coordinate, remaining[index].coordinate)
            # strict comparison keeps the earliest candidate on ties
            if distance < nearest_distance:
                nearest_index = index
                nearest_distance = distance
        current = remaining.pop(nearest_index)
        ordered.append(current)

    return ordered


def planar_route_length(stops: Sequence[Stop]) -> float:
    """Sum of planar leg lengths when visiting ``stops`` in the given order."""
    return sum(
        planar_distance(previous.coordinate, following.coordinate)
        for previous, following in zip(stops, stops[1:])
    )
