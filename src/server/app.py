from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from dataclasses import asdict
from typing import Dict, List, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from liftsim import Simulation, SimulationSettings
from liftsim.scenario import build_simulation, run_scenario, summarize

logger = logging.getLogger(__name__)

# Ticks run synchronously inside the request handler.
MAX_TICKS_PER_REQUEST = 100_000


class RequestBody(BaseModel):
    origin: int
    destination: int
    created_at: int = Field(0, ge=0)


class SettingsBody(BaseModel):
    record_trace: bool = True
    metrics_hook_interval: int = Field(1, ge=1)


class ScenarioBody(BaseModel):
    name: str = "scenario"
    description: Optional[str] = None
    num_floors: int = 10
    duration: int = Field(100, le=MAX_TICKS_PER_REQUEST)
    requests: List[RequestBody] = []
    settings: SettingsBody = SettingsBody()


class StepRequest(BaseModel):
    ticks: int = Field(1, ge=0, le=MAX_TICKS_PER_REQUEST)


def scenario_config(scenario: ScenarioBody) -> Dict:
    return {
        "name": scenario.name,
        "description": scenario.description,
        "num_floors": scenario.num_floors,
        "duration": scenario.duration,
        "requests": [
            {"origin": r.origin, "destination": r.destination, "created_at": r.created_at}
            for r in scenario.requests
        ],
        "settings": {
            "record_trace": scenario.settings.record_trace,
            "metrics_hook_interval": scenario.settings.metrics_hook_interval,
        },
    }


class SimulationManager:
    def __init__(self, num_floors: int = 10) -> None:
        self.simulation = Simulation(num_floors, settings=SimulationSettings(record_trace=False))
        self.scenario_name = "empty"
        self.clients: Set[WebSocket] = set()
        self._lock = asyncio.Lock()

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except (WebSocketDisconnect, RuntimeError):
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        return {
            "scenario": self.scenario_name,
            "state": self.simulation.snapshot(),
            "metrics": asdict(self.simulation.metrics_snapshot()),
        }

    async def reset(self, config: Dict) -> dict:
        # The shared simulation runs open-ended and never reports its trace.
        settings = dict(config.get("settings", {}), record_trace=False)
        simulation = build_simulation(dict(config, settings=settings))
        async with self._lock:
            self.simulation = simulation
            self.scenario_name = config.get("name", "scenario")
            state = self.current_state()
        logger.info("Loaded scenario %s with %d requests", self.scenario_name, len(simulation.requests))
        await self.broadcast(state)
        return state

    async def step(self, ticks: int) -> dict:
        async with self._lock:
            self.simulation.run(ticks)
            state = self.current_state()
        await self.broadcast(state)
        return state


manager = SimulationManager()
app = FastAPI(title="liftsim Simulation API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.post("/simulation")
async def load_simulation(scenario: ScenarioBody) -> dict:
    try:
        return await manager.reset(scenario_config(scenario))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/simulation/step")
async def step_simulation(request: StepRequest) -> dict:
    return await manager.step(request.ticks)


@app.post("/scenarios/run")
async def run_scenario_once(scenario: ScenarioBody) -> dict:
    config = scenario_config(scenario)
    try:
        simulation = build_simulation(config)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    snapshots = run_scenario(simulation, config)
    results = summarize(simulation, config)
    results["metrics_over_time"] = snapshots
    return results


@app.websocket("/ws/stream")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await manager.register(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await manager.unregister(websocket)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
