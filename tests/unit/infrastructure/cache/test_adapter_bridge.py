import pytest

from tiercache.domain.models.cache_entry import CacheEntry
from tiercache.infrastructure.cache.adapter_bridge import AdapterBridge


@pytest.mark.asyncio
async def test_no_adapter_reads_none_and_ignores_writes():
    bridge = AdapterBridge()

    assert bridge.enabled is False
    assert await bridge.get_from_adapter("k") is None
    assert await bridge.save_to_adapter("k", CacheEntry(data=1, metadata=None)) is None


@pytest.mark.asyncio
async def test_sync_adapter_pass_through(adapter):
    bridge = AdapterBridge(adapter)
    entry = CacheEntry(data="v", metadata=None)

    await bridge.save_to_adapter("k", entry)

    assert bridge.enabled is True
    assert adapter.set_calls == [("k", entry)]
    assert await bridge.get_from_adapter("k") is entry


@pytest.mark.asyncio
async def test_async_adapter_is_awaited(async_adapter):
    bridge = AdapterBridge(async_adapter)
    entry = CacheEntry(data="v", metadata=None)

    await bridge.save_to_adapter("k", entry)

    assert async_adapter.records["k"] is entry
    assert await bridge.get_from_adapter("k") is entry
    assert await bridge.get_from_adapter("other") is None


@pytest.mark.asyncio
async def test_adapter_errors_are_not_suppressed(async_adapter, mocker):
    mocker.patch.object(async_adapter, "get_value", side_effect=TimeoutError("slow"))
    bridge = AdapterBridge(async_adapter)

    with pytest.raises(TimeoutError, match="slow"):
        await bridge.get_from_adapter("k")


def test_rejects_non_adapter():
    with pytest.raises(TypeError, match="adapter must implement CacheAdapter"):
        AdapterBridge(object())
