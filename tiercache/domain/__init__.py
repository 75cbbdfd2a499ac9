"""Domain Layer: cache entries, loader shapes, events and the adapter port."""
