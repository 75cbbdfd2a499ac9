"""Expiration policy for cache entries.

Expiry is precomputed when an entry is created and only compared afterwards.
All timestamps are integer milliseconds since the epoch.
"""

import time
from typing import Any, Mapping, Optional, Union

from tiercache.domain.models.cache_entry import CacheEntry, CacheMetadata, CacheOptions
from tiercache.domain.models.common import NEVER_EXPIRES


def now_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


def create_cache_entry(value: Any, options: CacheOptions, now: Optional[int] = None) -> CacheEntry:
    """Wraps value in a new entry stamped with the given options.

    A negative ttl_ms stores the NEVER_EXPIRES sentinel. A threshold larger
    than the ttl yields an entry that is already expired.
    """
    created_at = now_ms() if now is None else now
    if options.ttl_ms < 0:
        expires_at = NEVER_EXPIRES
    else:
        expires_at = created_at + options.ttl_ms - options.expiration_threshold_ms

    return CacheEntry(
        data=value,
        metadata=CacheMetadata(
            created_at=created_at,
            ttl_ms=options.ttl_ms,
            expiration_threshold_ms=options.expiration_threshold_ms,
            expires_at=expires_at,
        ),
    )


def is_expired(metadata: Optional[Union[CacheMetadata, Mapping[str, Any]]], now: Optional[int] = None) -> bool:
    """Checks whether metadata describes an expired entry.

    Missing metadata is expired. A negative expires_at never expires. When
    expires_at is missing (records from foreign adapters) the expiry falls
    back to created_at + ttl_ms, and to expired if that cannot be computed.
    The expiry instant itself counts as expired.
    """
    if metadata is None:
        return True
    if isinstance(metadata, Mapping):
        metadata = CacheMetadata.from_mapping(metadata)

    expires_at = metadata.expires_at
    if expires_at is not None and expires_at < 0:
        return False

    if expires_at is None:
        if metadata.created_at is None or metadata.ttl_ms is None:
            return True
        expires_at = metadata.created_at + metadata.ttl_ms

    current = now_ms() if now is None else now
    return current >= expires_at
