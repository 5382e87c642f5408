"""Build and run simulations from JSON-style scenario dictionaries."""
from __future__ import annotations

from dataclasses import asdict
from typing import Dict, List

from .config import SimulationSettings
from .request import Request
from .simulation import Simulation

DEFAULT_DURATION = 100


def build_simulation(config: Dict) -> Simulation:
    num_floors = config.get("num_floors", 10)
    settings = SimulationSettings(**config.get("settings", {}))
    requests = [
        Request(
            origin=r["origin"],
            destination=r["destination"],
            created_at=r.get("created_at", 0),
            request_id=r.get("id", index),
        )
        for index, r in enumerate(config.get("requests", []))
    ]
    return Simulation(num_floors=num_floors, requests=requests, settings=settings)


def run_scenario(simulation: Simulation, config: Dict) -> List[Dict]:
    """Run the configured number of ticks and collect the emitted metrics."""
    duration = config.get("duration", DEFAULT_DURATION)
    snapshots: List[Dict] = []

    def collect(payload: Dict) -> None:
        snapshots.append(asdict(payload["metrics"]))

    simulation.on_event("metrics", collect)
    try:
        simulation.run(duration)
    finally:
        simulation.off_event("metrics", collect)
    return snapshots


def summarize(simulation: Simulation, config: Dict) -> Dict:
    return {
        "scenario": config.get("name", "scenario"),
        "description": config.get("description"),
        "duration": config.get("duration", DEFAULT_DURATION),
        "final_metrics": asdict(simulation.metrics_snapshot()),
        "final_state": simulation.snapshot(),
        "trace": [asdict(record) for record in simulation.trace],
    }
