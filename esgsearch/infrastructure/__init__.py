"""Infrastructure: record store, collection adapters and recent-search persistence."""
