import unittest

from fastapi.testclient import TestClient

from server.app import MAX_TICKS_PER_REQUEST, app, manager

SINGLE_RIDER = {
    "name": "single",
    "num_floors": 5,
    "duration": 10,
    "requests": [{"origin": 1, "destination": 5, "created_at": 0}],
}


class TestServer(unittest.TestCase):
    """HTTP endpoints of the simulation API"""

    def setUp(self):
        self.client = TestClient(app)
        response = self.client.post("/simulation", json=SINGLE_RIDER)
        self.assertEqual(response.status_code, 200)

    def test_load_resets_state(self):
        body = self.client.get("/state").json()
        self.assertEqual(body["scenario"], "single")
        self.assertEqual(body["state"]["time"], 0)
        self.assertEqual(body["state"]["floor"], 1)
        self.assertEqual(body["state"]["direction"], "stopped")

    def test_step(self):
        body = self.client.post("/simulation/step", json={"ticks": 3}).json()
        self.assertEqual(body["state"]["time"], 3)
        self.assertEqual(body["state"]["floor"], 4)
        self.assertEqual(body["state"]["policy"], "Up")

        body = self.client.post("/simulation/step", json={"ticks": 7}).json()
        self.assertEqual(body["state"]["requests"][0]["arrival_time"], 4)
        self.assertEqual(body["metrics"]["throughput"], 1)

    def test_shared_simulation_keeps_no_trace(self):
        self.client.post("/simulation", json=dict(SINGLE_RIDER, settings={"record_trace": True}))
        self.client.post("/simulation/step", json={"ticks": 25})
        self.assertEqual(manager.simulation.current_time, 25)
        self.assertEqual(manager.simulation.trace, [])

    def test_tick_counts_are_bounded(self):
        response = self.client.post("/simulation/step", json={"ticks": MAX_TICKS_PER_REQUEST + 1})
        self.assertEqual(response.status_code, 422)
        response = self.client.post("/scenarios/run", json=dict(SINGLE_RIDER, duration=MAX_TICKS_PER_REQUEST + 1))
        self.assertEqual(response.status_code, 422)
        self.assertEqual(manager.simulation.current_time, 0)

    def test_step_rejects_negative_ticks(self):
        response = self.client.post("/simulation/step", json={"ticks": -1})
        self.assertEqual(response.status_code, 422)

    def test_invalid_scenario(self):
        response = self.client.post("/simulation", json={"num_floors": 0})
        self.assertEqual(response.status_code, 400)
        response = self.client.post(
            "/scenarios/run", json={"num_floors": 3, "requests": [{"origin": 1, "destination": 7}]}
        )
        self.assertEqual(response.status_code, 400)

    def test_run_scenario(self):
        body = self.client.post("/scenarios/run", json=SINGLE_RIDER).json()
        self.assertEqual(body["scenario"], "single")
        self.assertEqual(body["final_state"]["floor"], 5)
        self.assertEqual(body["final_metrics"]["average_travel"], 4.0)
        self.assertEqual(len(body["trace"]), 10)
        self.assertEqual(len(body["metrics_over_time"]), 10)
        # the shared simulation is untouched
        self.assertEqual(self.client.get("/state").json()["state"]["time"], 0)

    def test_stream_sends_current_state(self):
        with self.client.websocket_connect("/ws/stream") as websocket:
            body = websocket.receive_json()
        self.assertEqual(body["scenario"], "single")
        self.assertEqual(body["state"]["num_floors"], 5)

    def test_stream_broadcasts_steps(self):
        with self.client.websocket_connect("/ws/stream") as websocket:
            websocket.receive_json()
            self.client.post("/simulation/step", json={"ticks": 2})
            body = websocket.receive_json()
        self.assertEqual(body["state"]["time"], 2)
        self.assertEqual(body["state"]["floor"], 3)


if __name__ == "__main__":
    unittest.main()
