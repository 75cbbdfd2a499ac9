"""Cache entry and option value objects.

A CacheEntry pairs an opaque value with the metadata the expiration policy
needs. Entries are created by ``tiercache.core.expiration.create_cache_entry``
and stored unchanged in every tier.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Generic, Mapping, Optional, TypeVar, Union

T = TypeVar("T")

DEFAULT_TTL_MS = 60 * 60 * 1000  # 1 hour
DEFAULT_EXPIRATION_THRESHOLD_MS = 0

# Metadata keys written by other implementations of the same record layout
_CAMEL_CASE_KEYS = {
    "createdAt": "created_at",
    "ttlMs": "ttl_ms",
    "expirationThresholdMs": "expiration_threshold_ms",
    "expiresAt": "expires_at",
}


@dataclass(frozen=True)
class CacheOptions:
    """Options applied when a new entry is written.

    Attributes:
        ttl_ms: Nominal lifetime in milliseconds. Negative means never expire.
        expiration_threshold_ms: Subtracted from the nominal expiry so entries
            are refreshed before consumers can observe a stale value.
    """
    ttl_ms: int = DEFAULT_TTL_MS
    expiration_threshold_ms: int = DEFAULT_EXPIRATION_THRESHOLD_MS

    def merge(self, overrides: Optional[Union["CacheOptions", Mapping[str, int]]] = None) -> "CacheOptions":
        """Returns a copy with the given (possibly partial) overrides applied.

        Raises:
            TypeError: If overrides contain an unknown option name or a
                None value.
        """
        if overrides is None:
            return self
        if isinstance(overrides, CacheOptions):
            return overrides
        values = dict(overrides)
        unset = sorted(name for name, value in values.items() if value is None)
        if unset:
            raise TypeError(f"Cache options must not be None: {', '.join(unset)}")
        return replace(self, **values)


@dataclass(frozen=True)
class CacheMetadata:
    """Bookkeeping stored next to every cached value.

    Fields are Optional only to represent records coming from foreign
    adapters; entries built by this package always set all four.
    """
    created_at: Optional[int]
    ttl_ms: Optional[int]
    expiration_threshold_ms: Optional[int]
    expires_at: Optional[int]

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "CacheMetadata":
        """Builds metadata from a mapping, accepting snake_case or camelCase keys."""
        values = {_CAMEL_CASE_KEYS.get(k, k): v for k, v in raw.items()}
        return cls(**{f.name: values.get(f.name) for f in fields(cls)})

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class CacheEntry(Generic[T]):
    """A cached value together with its metadata."""
    data: T
    metadata: Optional[CacheMetadata]

    @classmethod
    def coerce(cls, raw: Union["CacheEntry", Mapping[str, Any]]) -> "CacheEntry":
        """Normalizes an adapter record into a CacheEntry.

        CacheEntry instances are returned as-is. Mappings of the shape
        ``{"data": ..., "metadata": {...}}`` are converted; missing metadata
        is kept as None and left for the expiration policy to reject.

        Raises:
            TypeError: If the record is neither a CacheEntry nor a mapping.
        """
        if isinstance(raw, CacheEntry):
            return raw
        if isinstance(raw, Mapping):
            metadata = raw.get("metadata")
            if isinstance(metadata, Mapping):
                metadata = CacheMetadata.from_mapping(metadata)
            elif not isinstance(metadata, CacheMetadata):
                metadata = None
            return cls(data=raw.get("data"), metadata=metadata)
        raise TypeError(f"Unsupported cache record type: {type(raw).__name__}")

    def to_dict(self) -> dict:
        """Plain-dict form for adapters that persist JSON-like records."""
        return {
            "data": self.data,
            "metadata": self.metadata.to_dict() if self.metadata is not None else None,
        }
