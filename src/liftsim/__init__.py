"""Single elevator, discrete tick simulation primitives."""

from .config import SimulationSettings, configure_logging
from .elevator import Elevator
from .errors import InvalidConfigurationError, InvalidRequestError, LiftSimError
from .request import Request
from .simulation import MetricsSnapshot, MetricsTracker, Simulation, TickRecord

__all__ = [
    "Elevator",
    "InvalidConfigurationError",
    "InvalidRequestError",
    "LiftSimError",
    "MetricsSnapshot",
    "MetricsTracker",
    "Request",
    "Simulation",
    "SimulationSettings",
    "TickRecord",
    "configure_logging",
]
