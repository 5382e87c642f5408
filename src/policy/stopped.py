from __future__ import annotations

from typing import TYPE_CHECKING

from .interface import Direction
from .utils import closest_target_floor, service_current_floor

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from liftsim.simulation import Simulation


class StoppedPolicy:
    """Car at rest; starts moving toward the nearest floor a request needs."""

    direction = Direction.STOPPED
    name = "Stopped"

    def next_decision(self, simulation: "Simulation") -> None:
        active = simulation.active_requests()
        if not active:
            return

        # A request may become active while the car already waits at its origin.
        service_current_floor(simulation, active)

        target = closest_target_floor(active, simulation.current_floor)
        if target is not None and target > simulation.current_floor:
            simulation.change_policy(Direction.UP)
        else:
            simulation.change_policy(Direction.DOWN)
        simulation.move(simulation.direction)
