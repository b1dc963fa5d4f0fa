"""HTTP API for the garden."""
