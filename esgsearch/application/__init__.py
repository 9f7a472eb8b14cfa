"""Application layer: DTOs, ports, scoring and search use cases."""
