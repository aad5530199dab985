"""Schema and workload models."""
