"""Domain Events related to cache lookups."""

from dataclasses import dataclass, field
import time

from tiercache.domain.models.common import CacheKey


@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass


@dataclass
class CacheLookupResolved(DomainEvent):
    """Event triggered when a get() call finishes.

    tier is one of 'memory', 'loader', 'adapter' or 'miss'.
    """
    key: CacheKey
    tier: str
    timestamp: float = field(default_factory=time.time)
