"""Domain events emitted by the cache service."""
