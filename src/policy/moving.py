from __future__ import annotations

from typing import TYPE_CHECKING

from .interface import Direction
from .utils import request_on_path, service_current_floor

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from liftsim.simulation import Simulation


class MovingPolicy:
    """Car travelling in a fixed direction (LOOK style reversal).

    Each tick the car either services its floor and holds there, keeps going
    while some request needs a floor further ahead, or turns around. When no
    request is active it comes to rest without moving.
    """

    direction: Direction
    name: str

    def next_decision(self, simulation: "Simulation") -> None:
        active = simulation.active_requests()
        if not active:
            simulation.change_policy(Direction.STOPPED)
            return

        # The floor is handled at most once per visit.
        if simulation.consume_floor_handled() or not service_current_floor(simulation, active):
            if request_on_path(active, simulation.current_floor, self.direction):
                simulation.move(self.direction)
            else:
                reverse = self.direction.opposite
                simulation.change_policy(reverse)
                simulation.move(reverse)
        else:
            simulation.mark_floor_handled()


class MovingUpPolicy(MovingPolicy):
    direction = Direction.UP
    name = "Up"


class MovingDownPolicy(MovingPolicy):
    direction = Direction.DOWN
    name = "Down"
