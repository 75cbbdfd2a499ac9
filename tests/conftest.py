import pytest
from typing import Any, Dict, List, Optional

from tiercache.domain.interfaces.cache_adapter import CacheAdapter
from tiercache.domain.models.cache_entry import CacheOptions
from tiercache.core.expiration import create_cache_entry


class RecordingAdapter(CacheAdapter):
    """Synchronous dict-backed adapter that records every call."""

    def __init__(self, records: Optional[Dict[str, Any]] = None):
        self.records: Dict[str, Any] = dict(records or {})
        self.get_calls: List[str] = []
        self.set_calls: List[tuple] = []

    def get_value(self, key):
        self.get_calls.append(key)
        return self.records.get(key)

    def set_value(self, key, value):
        self.set_calls.append((key, value))
        self.records[key] = value


class AsyncRecordingAdapter(RecordingAdapter):
    """Same as RecordingAdapter, with coroutine methods."""

    async def get_value(self, key):
        return RecordingAdapter.get_value(self, key)

    async def set_value(self, key, value):
        RecordingAdapter.set_value(self, key, value)


@pytest.fixture
def adapter() -> RecordingAdapter:
    return RecordingAdapter()


@pytest.fixture
def async_adapter() -> AsyncRecordingAdapter:
    return AsyncRecordingAdapter()


@pytest.fixture
def make_entry():
    """Builds an entry created at the given time (defaults to now)."""
    def _make(value: Any, ttl_ms: int = 60_000, expiration_threshold_ms: int = 0, now: Optional[int] = None):
        options = CacheOptions(ttl_ms=ttl_ms, expiration_threshold_ms=expiration_threshold_ms)
        return create_cache_entry(value, options, now=now)
    return _make
