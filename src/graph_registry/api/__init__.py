"""HTTP API for the graph registry."""
