from __future__ import annotations

import logging
from dataclasses import dataclass

from policy import Direction

logger = logging.getLogger(__name__)


@dataclass
class Elevator:
    """Position and travel state of the car."""

    num_floors: int
    current_floor: int = 1
    direction: Direction = Direction.STOPPED
    # Set after the car boarded or dropped off riders on its floor; the next
    # moving tick leaves the floor without servicing it again.
    floor_handled: bool = False

    def move(self, direction: Direction) -> bool:
        target = self.current_floor + direction.value
        if not 1 <= target <= self.num_floors:
            logger.debug("Move %s from floor %d blocked at end of shaft", direction.name, self.current_floor)
            return False
        self.current_floor = target
        return True

    def change_direction(self, direction: Direction) -> None:
        self.direction = direction
        self.floor_handled = False

    def mark_floor_handled(self) -> None:
        self.floor_handled = True

    def consume_floor_handled(self) -> bool:
        handled = self.floor_handled
        self.floor_handled = False
        return handled
