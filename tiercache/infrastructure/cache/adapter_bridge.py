"""Bridge to the optional external cache tier.

Hides whether an adapter is configured and whether its methods are
synchronous or asynchronous. Adapter errors are never caught here.
"""

import inspect
import logging
from typing import Any, Optional

from tiercache.domain.interfaces.cache_adapter import CacheAdapter
from tiercache.domain.models.cache_entry import CacheEntry
from tiercache.domain.models.common import CacheKey

logger = logging.getLogger(__name__)


class AdapterBridge:
    """Pass-through to a CacheAdapter that tolerates its absence."""

    def __init__(self, adapter: Optional[CacheAdapter] = None):
        """Initializes the bridge.

        Args:
            adapter: The external tier, or None for memory-only operation.

        Raises:
            TypeError: If adapter is given but is not a CacheAdapter.
        """
        if adapter is not None and not isinstance(adapter, CacheAdapter):
            raise TypeError(
                f"adapter must implement CacheAdapter, got {type(adapter).__name__}"
            )
        self.adapter = adapter

    @property
    def enabled(self) -> bool:
        return self.adapter is not None

    async def get_from_adapter(self, key: CacheKey) -> Optional[Any]:
        """Fetches the raw record for key, or None without an adapter."""
        if self.adapter is None:
            return None

        result = self.adapter.get_value(key)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def save_to_adapter(self, key: CacheKey, entry: CacheEntry) -> None:
        """Persists entry under key. No-op without an adapter."""
        if self.adapter is None:
            return

        result = self.adapter.set_value(key, entry)
        if inspect.isawaitable(result):
            await result
        logger.debug(f"Stored entry in adapter tier: key={key}")
