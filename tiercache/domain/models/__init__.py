"""Value objects stored in and passed through the cache tiers."""
