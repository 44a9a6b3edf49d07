"""HTTP API for condition evaluation and form visibility."""
