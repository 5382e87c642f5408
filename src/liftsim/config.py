from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class SimulationSettings:
    """Run options that sit outside the decision policy."""

    record_trace: bool = True
    metrics_hook_interval: int = 1

    def __post_init__(self) -> None:
        self.metrics_hook_interval = max(1, self.metrics_hook_interval)


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
