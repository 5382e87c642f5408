from __future__ import annotations

from typing import Dict

from .interface import DecisionPolicy, Direction
from .moving import MovingDownPolicy, MovingPolicy, MovingUpPolicy
from .stopped import StoppedPolicy
from .utils import active_requests, closest_target_floor, request_on_path, service_current_floor

__all__ = [
    "DecisionPolicy",
    "Direction",
    "MovingDownPolicy",
    "MovingPolicy",
    "MovingUpPolicy",
    "StoppedPolicy",
    "active_requests",
    "closest_target_floor",
    "get_policy",
    "request_on_path",
    "service_current_floor",
]


POLICY_REGISTRY: Dict[Direction, DecisionPolicy] = {
    Direction.STOPPED: StoppedPolicy(),
    Direction.UP: MovingUpPolicy(),
    Direction.DOWN: MovingDownPolicy(),
}


def get_policy(direction: Direction) -> DecisionPolicy:
    policy = POLICY_REGISTRY.get(direction)
    if policy is None:
        raise ValueError(f"Unknown direction '{direction}'. Available: {', '.join(d.name for d in POLICY_REGISTRY)}")
    return policy
