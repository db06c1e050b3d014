"""HTTP API for the dependency engine."""
