from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from policy import Direction, active_requests, get_policy

from .config import SimulationSettings
from .elevator import Elevator
from .errors import InvalidConfigurationError, InvalidRequestError
from .request import Request

logger = logging.getLogger(__name__)


@dataclass
class TickRecord:
    policy: str
    time_step: int
    floor: int


@dataclass
class MetricsSnapshot:
    time_step: int
    average_wait: float
    wait_p95: float
    average_travel: float
    travel_p95: float
    throughput: int
    outstanding: int


class MetricsTracker:
    def __init__(self) -> None:
        self.wait_times: List[int] = []
        self.travel_times: List[int] = []
        self.throughput: int = 0

    def record_wait_time(self, request: Request) -> None:
        if request.wait_time is not None:
            self.wait_times.append(request.wait_time)

    def record_travel_time(self, request: Request) -> None:
        if request.travel_time is not None:
            self.travel_times.append(request.travel_time)
            self.throughput += 1

    def _average(self, values: List[int]) -> float:
        if not values:
            return 0.0
        return sum(values) / len(values)

    def _percentile(self, values: List[int], percentile: float) -> float:
        if not values:
            return 0.0
        sorted_vals = sorted(values)
        k = (len(sorted_vals) - 1) * percentile
        f = math.floor(k)
        c = math.ceil(k)
        if f == c:
            return float(sorted_vals[int(k)])
        d0 = sorted_vals[int(f)] * (c - k)
        d1 = sorted_vals[int(c)] * (k - f)
        return float(d0 + d1)

    def snapshot(self, time_step: int, outstanding: int = 0) -> MetricsSnapshot:
        return MetricsSnapshot(
            time_step=time_step,
            average_wait=self._average(self.wait_times),
            wait_p95=self._percentile(self.wait_times, 0.95),
            average_travel=self._average(self.travel_times),
            travel_p95=self._percentile(self.travel_times, 0.95),
            throughput=self.throughput,
            outstanding=outstanding,
        )


class Simulation:
    """Single elevator driven tick by tick by its current decision policy.

    The simulation owns the car and every request for its whole lifetime.
    Policies only get the active requests of the tick they run in and change
    state through the methods below.
    """

    def __init__(
        self,
        num_floors: int,
        requests: Iterable[Request] = (),
        settings: Optional[SimulationSettings] = None,
    ) -> None:
        if num_floors < 1:
            raise InvalidConfigurationError(f"num_floors must be at least 1, got {num_floors}")
        self.requests: List[Request] = list(requests)
        for request in self.requests:
            self._validate_request(request, num_floors)
        self.elevator = Elevator(num_floors)
        self.settings = settings or SimulationSettings()
        self.current_time: int = 0
        self.metrics = MetricsTracker()
        self.trace: List[TickRecord] = []
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}

    @classmethod
    def from_triples(
        cls,
        num_floors: int,
        triples: Iterable[Tuple[int, int, int]],
        settings: Optional[SimulationSettings] = None,
    ) -> "Simulation":
        """Build a simulation from ``(origin, destination, created_at)`` triples."""
        requests = [
            Request(origin=origin, destination=destination, created_at=created_at, request_id=index)
            for index, (origin, destination, created_at) in enumerate(triples)
        ]
        return cls(num_floors, requests, settings)

    @property
    def num_floors(self) -> int:
        return self.elevator.num_floors

    @property
    def current_floor(self) -> int:
        return self.elevator.current_floor

    @property
    def direction(self) -> Direction:
        return self.elevator.direction

    @property
    def policy_name(self) -> str:
        return get_policy(self.elevator.direction).name

    def run(self, duration: int) -> None:
        for _ in range(max(0, duration)):
            self.step()

    def step(self) -> None:
        policy = get_policy(self.elevator.direction)
        record = TickRecord(policy.name, self.current_time, self.elevator.current_floor)
        logger.debug("%s: %d %d", record.policy, record.time_step, record.floor)
        if self.settings.record_trace:
            self.trace.append(record)
        self._emit("tick", record)

        policy.next_decision(self)

        if self.current_time % self.settings.metrics_hook_interval == 0:
            self._emit_metrics()

        self.current_time += 1

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def off_event(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self.event_hooks.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    # State changes available to the decision policies.

    def active_requests(self) -> List[Request]:
        return active_requests(self.requests, self.current_time)

    def move(self, direction: Direction) -> bool:
        return self.elevator.move(direction)

    def change_policy(self, direction: Direction) -> None:
        previous = self.elevator.direction
        self.elevator.change_direction(direction)
        if direction is previous:
            return
        logger.info(
            "t=%d floor %d: %s -> %s",
            self.current_time,
            self.elevator.current_floor,
            previous.name,
            direction.name,
        )
        self._emit(
            "direction",
            {
                "time": self.current_time,
                "floor": self.elevator.current_floor,
                "previous": previous.name.lower(),
                "direction": direction.name.lower(),
            },
        )

    def mark_floor_handled(self) -> None:
        self.elevator.mark_floor_handled()

    def consume_floor_handled(self) -> bool:
        return self.elevator.consume_floor_handled()

    def record_pickup(self, request: Request) -> None:
        request.record_pickup(self.current_time)
        self.metrics.record_wait_time(request)
        logger.debug("t=%d floor %d: picked up request %d", self.current_time, request.origin, request.request_id)
        self._emit("pickup", {"time": self.current_time, "request_id": request.request_id, "floor": request.origin})

    def record_arrival(self, request: Request) -> None:
        request.record_arrival(self.current_time)
        self.metrics.record_travel_time(request)
        logger.debug(
            "t=%d floor %d: delivered request %d", self.current_time, request.destination, request.request_id
        )
        self._emit(
            "arrival", {"time": self.current_time, "request_id": request.request_id, "floor": request.destination}
        )

    def outstanding_requests(self) -> int:
        return sum(1 for request in self.requests if not request.serviced)

    def metrics_snapshot(self) -> MetricsSnapshot:
        return self.metrics.snapshot(self.current_time, self.outstanding_requests())

    def snapshot(self) -> dict:
        return {
            "time": self.current_time,
            "num_floors": self.elevator.num_floors,
            "floor": self.elevator.current_floor,
            "direction": self.elevator.direction.name.lower(),
            "policy": self.policy_name,
            "requests": [
                {
                    "id": request.request_id,
                    "origin": request.origin,
                    "destination": request.destination,
                    "created_at": request.created_at,
                    "picked_up": request.picked_up,
                    "serviced": request.serviced,
                    "pickup_time": request.pickup_time,
                    "arrival_time": request.arrival_time,
                }
                for request in self.requests
            ],
        }

    def _validate_request(self, request: Request, num_floors: int) -> None:
        for label, floor in (("origin", request.origin), ("destination", request.destination)):
            if not 1 <= floor <= num_floors:
                raise InvalidRequestError(
                    f"Request {request.request_id}: {label} floor {floor} outside 1..{num_floors}"
                )
        if request.created_at < 0:
            raise InvalidRequestError(f"Request {request.request_id}: negative creation time {request.created_at}")

    def _emit_metrics(self) -> None:
        self._emit("metrics", {"metrics": self.metrics_snapshot(), "state": self.snapshot()})

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)
