from __future__ import annotations


class LiftSimError(Exception):
    """Base class for errors raised by the simulation."""


class InvalidConfigurationError(LiftSimError, ValueError):
    """The simulation cannot be built with the given parameters."""


class InvalidRequestError(LiftSimError, ValueError):
    """A request refers to floors or times the simulation cannot serve."""
