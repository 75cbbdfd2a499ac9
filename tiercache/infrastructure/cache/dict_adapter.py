"""Synchronous adapter holding records in a plain dict.

Useful for sharing an external tier between several service instances in one
process, and as a stand-in for a real store in tests.
"""

import threading
from typing import Any, Dict, Optional

from tiercache.domain.interfaces.cache_adapter import CacheAdapter
from tiercache.domain.models.common import CacheKey


class InMemoryAdapter(CacheAdapter):
    def __init__(self, records: Optional[Dict[CacheKey, Any]] = None):
        self.records: Dict[CacheKey, Any] = dict(records or {})
        self._lock = threading.Lock()

    def get_value(self, key: CacheKey) -> Optional[Any]:
        with self._lock:
            return self.records.get(key)

    def set_value(self, key: CacheKey, value: Any) -> None:
        with self._lock:
            self.records[key] = value
