"""Schema-to-workload compiler."""
