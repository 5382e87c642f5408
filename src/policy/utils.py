from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional

from .interface import Direction

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from liftsim.request import Request
    from liftsim.simulation import Simulation


def active_requests(requests: Iterable["Request"], time_step: int) -> List["Request"]:
    """Requests visible at ``time_step`` and not yet serviced, in insertion order."""

    return [request for request in requests if request.is_active(time_step)]


def service_current_floor(simulation: "Simulation", active: List["Request"]) -> bool:
    """Board and drop off riders at the car's floor.

    Serviced requests are removed from ``active`` in place; picked up ones
    stay in it. Returns True if anything happened on this floor.
    """

    floor = simulation.current_floor
    handled = False
    remaining: List["Request"] = []
    for request in active:
        if request.origin == floor and not request.picked_up:
            simulation.record_pickup(request)
            handled = True
        elif request.destination == floor and request.picked_up:
            simulation.record_arrival(request)
            handled = True
            continue
        remaining.append(request)
    active[:] = remaining
    return handled


def closest_target_floor(active: Iterable["Request"], floor: int) -> Optional[int]:
    """Nearest floor any request still needs, preferring floors above on ties."""

    closest: Optional[int] = None
    best_distance: Optional[int] = None
    for request in active:
        target = request.target_floor
        distance = abs(target - floor)
        if best_distance is None or distance < best_distance:
            best_distance = distance
            closest = target
        elif distance == best_distance and target > floor:
            closest = target
    return closest


def request_on_path(active: Iterable["Request"], floor: int, direction: Direction) -> bool:
    """True if a request needs a floor strictly beyond ``floor`` in ``direction``."""

    if direction is Direction.STOPPED:
        return False
    return any((request.target_floor - floor) * direction.value > 0 for request in active)
