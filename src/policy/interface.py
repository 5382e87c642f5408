from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from liftsim.simulation import Simulation


class Direction(Enum):
    """Travel direction of the car; the value is the floor delta of one move."""

    STOPPED = 0
    UP = 1
    DOWN = -1

    @property
    def opposite(self) -> "Direction":
        if self is Direction.UP:
            return Direction.DOWN
        if self is Direction.DOWN:
            return Direction.UP
        return Direction.STOPPED


class DecisionPolicy(Protocol):
    """Behaviour of the elevator for one tick in a given direction."""

    direction: Direction
    name: str

    def next_decision(self, simulation: "Simulation") -> None:
        """
        Inspect the active requests and mutate the simulation for one tick.

        Implementations may service the current floor, move the car by at
        most one floor and switch the simulation to another policy. The clock
        is advanced by the caller.
        """
        ...
