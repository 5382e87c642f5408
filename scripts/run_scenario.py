"""CLI for running offline liftsim scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, Optional

from liftsim import configure_logging
from liftsim.scenario import build_simulation, run_scenario, summarize

logger = logging.getLogger("liftsim.cli")


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write results and metrics snapshots as JSON",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level; DEBUG prints the per-tick trace",
    )
    args = parser.parse_args()
    configure_logging(args.log_level)

    config = json.loads(args.config.read_text())
    config.setdefault("name", args.config.stem)
    try:
        simulation = build_simulation(config)
    except ValueError as exc:
        parser.error(str(exc))
    snapshots = run_scenario(simulation, config)

    results = summarize(simulation, config)
    results["metrics_over_time"] = snapshots

    save_results(args.output, results)

    state = results["final_state"]
    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Duration: {results['duration']} ticks")
    print(f"Final floor: {state['floor']} ({state['policy']})")
    print("Requests:")
    for request in state["requests"]:
        arrival = request["arrival_time"] if request["serviced"] else "pending"
        print(f"  #{request['id']} {request['origin']} -> {request['destination']} (t={request['created_at']}): {arrival}")
    print("Final metrics:")
    for key, value in results["final_metrics"].items():
        print(f"  {key}: {value}")
    if args.output:
        logger.info("Saved results to %s", args.output)
        print(f"Saved results to {args.output}")


if __name__ == "__main__":
    main()
