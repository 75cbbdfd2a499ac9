"""Interface for external cache storage.

Defines the contract an external key/value store must satisfy to act as the
persistent tier behind the tiered cache service. How records are encoded is
entirely up to the implementation.
"""

import abc
from typing import Any, Awaitable, Optional, Union

from ..models.cache_entry import CacheEntry
from ..models.common import CacheKey


class CacheAdapter(abc.ABC):
    """Abstract Base Class for the external cache tier.

    Both methods may be implemented either as plain methods or as coroutines;
    callers await the result when it is awaitable.
    """

    @abc.abstractmethod
    def get_value(self, key: CacheKey) -> Union[Optional[Any], Awaitable[Optional[Any]]]:
        """Retrieves the record stored under key.

        Args:
            key: The cache key to retrieve.

        Returns:
            A CacheEntry (or a mapping of the same shape) if present,
            otherwise None.
        """
        pass

    @abc.abstractmethod
    def set_value(self, key: CacheKey, value: CacheEntry) -> Union[None, Awaitable[None]]:
        """Stores a record under key, replacing any previous one.

        Args:
            key: The cache key to store the record under.
            value: The entry to persist.
        """
        pass
