"""Persistent adapter backed by diskcache.

Entries are pickled by diskcache as-is; expiry is decided by the entry
metadata, so diskcache's own expiry is left unset. Disk I/O runs in a worker
thread so the event loop is not blocked.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

import diskcache as dc

from tiercache.domain.interfaces.cache_adapter import CacheAdapter
from tiercache.domain.models.cache_entry import CacheEntry
from tiercache.domain.models.common import CacheKey

logger = logging.getLogger(__name__)

DEFAULT_DISK_CACHE_DIR = Path.home() / ".tiercache" / "disk_cache"
DEFAULT_TIMEOUT_SECONDS = 1  # SQLite busy timeout used by diskcache


class DiskCacheAdapter(CacheAdapter):
    """Stores cache entries in a diskcache directory shared across processes."""

    def __init__(
        self,
        cache_dir: Union[str, Path] = DEFAULT_DISK_CACHE_DIR,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.cache_dir = Path(cache_dir)
        self.disk_cache = dc.Cache(str(self.cache_dir), timeout=timeout)
        logger.info(f"Initialized disk cache adapter at: {self.disk_cache.directory}")

    async def get_value(self, key: CacheKey) -> Optional[CacheEntry]:
        return await asyncio.to_thread(self.disk_cache.get, key)

    async def set_value(self, key: CacheKey, value: CacheEntry) -> None:
        await asyncio.to_thread(self.disk_cache.set, key, value)

    def close(self) -> None:
        self.disk_cache.close()
        logger.debug(f"Closed disk cache at: {self.disk_cache.directory}")

    def __enter__(self) -> "DiskCacheAdapter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
