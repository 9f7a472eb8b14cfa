"""Domain layer: search kinds and domain exceptions (no framework imports)."""
