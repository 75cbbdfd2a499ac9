"""Defines common Value Objects shared by the cache layers."""

from typing import NewType

CacheKey = NewType("CacheKey", str)        # Unique key for a cache entry
Timestamp = NewType("Timestamp", int)      # Milliseconds since the epoch

# Sentinel stored in expires_at for entries that never expire
NEVER_EXPIRES = -1

# Names of the tiers a lookup can be served from
TIER_MEMORY = "memory"
TIER_LOADER = "loader"
TIER_ADAPTER = "adapter"
TIER_MISS = "miss"
