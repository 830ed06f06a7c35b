"""Workloads baked into demonstration images."""
