"""tiercache: a tiered, TTL-based value cache.

Looks values up in an in-process memory tier, an on-demand loader and an
optional external adapter, in that order, writing fresh values through to
every tier.
"""

from tiercache.core.cache_service import TieredCacheService
from tiercache.core.expiration import create_cache_entry, is_expired, now_ms
from tiercache.domain.events.cache_events import CacheLookupResolved
from tiercache.domain.interfaces.cache_adapter import CacheAdapter
from tiercache.domain.models.cache_entry import CacheEntry, CacheMetadata, CacheOptions
from tiercache.domain.models.loaders import AwaitableValue, ResolvedValue, ValueProducer

__all__ = [
    "TieredCacheService",
    "CacheAdapter",
    "CacheEntry",
    "CacheMetadata",
    "CacheOptions",
    "CacheLookupResolved",
    "ResolvedValue",
    "AwaitableValue",
    "ValueProducer",
    "create_cache_entry",
    "is_expired",
    "now_ms",
]
