from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class Request:
    """One rider's trip from ``origin`` to ``destination``.

    ``created_at`` is the tick at which the request becomes visible to the
    elevator. The servicing fields are only ever changed by the decision
    policy while the simulation runs.
    """

    origin: int
    destination: int
    created_at: int
    request_id: int = 0
    picked_up: bool = False
    serviced: bool = False
    pickup_time: Optional[int] = None
    arrival_time: Optional[int] = None

    def is_active(self, time_step: int) -> bool:
        return self.created_at <= time_step and not self.serviced

    @property
    def target_floor(self) -> int:
        """Floor the elevator has to reach next for this request."""
        return self.destination if self.picked_up else self.origin

    def record_pickup(self, time_step: int) -> None:
        self.picked_up = True
        self.pickup_time = time_step

    def record_arrival(self, time_step: int) -> None:
        self.arrival_time = time_step
        self.serviced = True

    @property
    def wait_time(self) -> Optional[int]:
        if self.pickup_time is None:
            return None
        return self.pickup_time - self.created_at

    @property
    def travel_time(self) -> Optional[int]:
        if self.pickup_time is None or self.arrival_time is None:
            return None
        return self.arrival_time - self.pickup_time
