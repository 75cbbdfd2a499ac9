"""Tiered cache service.

Resolves a key against three sources, first hit wins:

1. the in-process memory tier,
2. the caller's loader (the authoritative recomputation), written through
   to the adapter and memory,
3. the external adapter, whose valid entries are copied into memory as-is.

Loader and adapter failures propagate to the caller unchanged.
"""

import asyncio
import functools
import logging
import threading
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, TypeVar, Union

from tiercache.core.expiration import create_cache_entry, is_expired
from tiercache.domain.events.cache_events import CacheLookupResolved
from tiercache.domain.interfaces.cache_adapter import CacheAdapter
from tiercache.domain.models.cache_entry import CacheEntry, CacheOptions
from tiercache.domain.models.common import (
    CacheKey,
    TIER_ADAPTER,
    TIER_LOADER,
    TIER_MEMORY,
    TIER_MISS,
)
from tiercache.domain.models.loaders import as_value_loader, resolve_value_loader
from tiercache.infrastructure.cache.adapter_bridge import AdapterBridge
from tiercache.infrastructure.cache.memory_store import InMemoryStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

OptionsOverride = Union[CacheOptions, Mapping[str, int]]
LookupListener = Callable[[CacheLookupResolved], None]


class TieredCacheService:
    """Memory -> loader -> adapter cache with write-through.

    By default concurrent misses for the same key each run the loader and
    the last write wins. With coalesce_misses=True concurrent misses share
    a single in-flight resolution per key and event loop.
    """

    def __init__(
        self,
        adapter: Optional[CacheAdapter] = None,
        options: Optional[OptionsOverride] = None,
        *,
        coalesce_misses: bool = False,
        listener: Optional[LookupListener] = None,
    ):
        """Initializes the service.

        Args:
            adapter: Optional external tier. None runs the cache memory-only.
            options: Instance defaults, as CacheOptions or a partial mapping
                merged over the built-in defaults.
            coalesce_misses: Share one in-flight resolution between concurrent
                misses for the same key.
            listener: Called with a CacheLookupResolved event after every get.
        """
        self.options = CacheOptions().merge(options)
        self.memory = InMemoryStore()
        self.bridge = AdapterBridge(adapter)
        self.coalesce_misses = coalesce_misses
        self.listener = listener
        self._in_flight: Dict[Tuple[asyncio.AbstractEventLoop, CacheKey], asyncio.Task] = {}
        self._in_flight_lock = threading.Lock()

        logger.info(
            f"TieredCacheService initialized. ttl_ms={self.options.ttl_ms}, "
            f"expiration_threshold_ms={self.options.expiration_threshold_ms}, "
            f"adapter={type(adapter).__name__ if adapter is not None else None}, "
            f"coalesce_misses={coalesce_misses}"
        )

    @property
    def adapter(self) -> Optional[CacheAdapter]:
        return self.bridge.adapter

    async def get(
        self,
        key: CacheKey,
        loader: Any = None,
        options: Optional[OptionsOverride] = None,
    ) -> Optional[Any]:
        """Returns the value for key from the freshest available tier.

        Args:
            key: The cache key.
            loader: A value, an awaitable, a zero-argument producer or one of
                the ValueLoader variants. Consulted only on a memory miss.
            options: Per-call overrides of ttl_ms / expiration_threshold_ms,
                applied when the loader produces a new entry.

        Returns:
            The cached or freshly loaded value, or None on a total miss.
        """
        merged_options = self.options.merge(options)

        cached = self._try_get_from_memory(key)
        if cached is not None:
            self._notify(key, TIER_MEMORY)
            return cached

        if not self.coalesce_misses:
            value, tier = await self._resolve_miss(key, loader, merged_options)
        else:
            value, tier = await self._resolve_miss_once(key, loader, merged_options)

        self._notify(key, tier)
        return value

    def invalidate(self, key: CacheKey) -> bool:
        """Drops key from the memory tier. The adapter is left untouched."""
        return self.memory.delete(key)

    def clear(self) -> None:
        """Empties the memory tier. The adapter is left untouched."""
        self.memory.clear()

    # --- Resolution ---

    async def _resolve_miss(self, key: CacheKey, loader: Any, options: CacheOptions):
        fresh_value = await self._try_get_from_value_loader(loader)
        if fresh_value is not None:
            await self._cache_value(key, fresh_value, options)
            logger.debug(f"Loader resolved key: {key}")
            return fresh_value, TIER_LOADER

        adapter_value = await self._try_get_from_adapter(key)
        if adapter_value is not None:
            logger.debug(f"Adapter cache hit for key: {key}")
            return adapter_value, TIER_ADAPTER

        logger.debug(f"Cache miss for key: {key}")
        return None, TIER_MISS

    async def _resolve_miss_once(self, key: CacheKey, loader: Any, options: CacheOptions):
        # Tasks belong to one event loop; callers on other loops resolve on their own
        loop = asyncio.get_running_loop()
        flight_key = (loop, key)
        with self._in_flight_lock:
            task = self._in_flight.get(flight_key)
            if task is None:
                task = loop.create_task(self._resolve_miss(key, loader, options))
                self._in_flight[flight_key] = task
                task.add_done_callback(functools.partial(self._forget_in_flight, flight_key))
            else:
                logger.debug(f"Joining in-flight resolution for key: {key}")

        # Cancelling any caller, the first one included, leaves the task running
        return await asyncio.shield(task)

    def _forget_in_flight(self, flight_key, task: asyncio.Task) -> None:
        with self._in_flight_lock:
            if self._in_flight.get(flight_key) is task:
                del self._in_flight[flight_key]
        if not task.cancelled():
            # Mark retrieved so a failure nobody awaited does not log a warning
            task.exception()

    def _try_get_from_memory(self, key: CacheKey) -> Optional[Any]:
        entry = self.memory.get(key)
        if entry is not None and not is_expired(entry.metadata):
            logger.debug(f"Memory cache hit for key: {key}")
            return entry.data
        return None

    async def _try_get_from_value_loader(self, loader: Any) -> Optional[Any]:
        return await resolve_value_loader(as_value_loader(loader))

    async def _try_get_from_adapter(self, key: CacheKey) -> Optional[Any]:
        record = await self.bridge.get_from_adapter(key)
        if record is None:
            return None

        entry = CacheEntry.coerce(record)
        if is_expired(entry.metadata):
            logger.debug(f"Adapter entry expired for key: {key}")
            return None
        if entry.data is None:
            return None

        self.memory.set(key, entry)
        return entry.data

    async def _cache_value(self, key: CacheKey, value: Any, options: CacheOptions) -> None:
        entry = create_cache_entry(value, options)
        await self.bridge.save_to_adapter(key, entry)
        self.memory.set(key, entry)

    def _notify(self, key: CacheKey, tier: str) -> None:
        if self.listener is not None:
            self.listener(CacheLookupResolved(key=key, tier=tier))
