"""Process-local memory tier.

A plain dict guarded by a threading.Lock. Expired entries are not removed
here; the service treats them as misses and overwrites them on the next
write-through.
"""

import logging
import threading
from typing import Dict, List, Optional

from tiercache.domain.models.cache_entry import CacheEntry
from tiercache.domain.models.common import CacheKey

logger = logging.getLogger(__name__)


class InMemoryStore:
    """Thread-safe mapping from cache key to CacheEntry."""

    def __init__(self) -> None:
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: CacheKey) -> Optional[CacheEntry]:
        with self._lock:
            return self._entries.get(key)

    def set(self, key: CacheKey, entry: CacheEntry) -> None:
        with self._lock:
            self._entries[key] = entry
        logger.debug(f"Stored entry in memory tier: key={key}")

    def delete(self, key: CacheKey) -> bool:
        """Removes key, returning whether it was present."""
        with self._lock:
            removed = self._entries.pop(key, None) is not None
        if removed:
            logger.debug(f"Deleted entry from memory tier: key={key}")
        return removed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.info("Cleared memory tier.")

    def keys(self) -> List[CacheKey]:
        with self._lock:
            return list(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
