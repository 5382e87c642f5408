"""HTTP and WebSocket surface for liftsim."""
