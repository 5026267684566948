"""Application layer: orchestration of the domain services."""
