import pytest

from tiercache.core import expiration
from tiercache.core.expiration import create_cache_entry, is_expired, now_ms
from tiercache.domain.models.cache_entry import CacheMetadata, CacheOptions
from tiercache.domain.models.common import NEVER_EXPIRES

NOW = 1_700_000_000_000


def _metadata(created_at=NOW, ttl_ms=10_000, expiration_threshold_ms=0, expires_at=None):
    return CacheMetadata(
        created_at=created_at,
        ttl_ms=ttl_ms,
        expiration_threshold_ms=expiration_threshold_ms,
        expires_at=expires_at,
    )


def test_create_entry_with_positive_ttl():
    value = {"data": "test"}
    entry = create_cache_entry(value, CacheOptions(ttl_ms=5000, expiration_threshold_ms=1000), now=NOW)

    assert entry.data is value
    assert entry.metadata.created_at == NOW
    assert entry.metadata.ttl_ms == 5000
    assert entry.metadata.expiration_threshold_ms == 1000
    assert entry.metadata.expires_at == NOW + 5000 - 1000


def test_create_entry_threshold_is_subtracted():
    entry = create_cache_entry(123, CacheOptions(ttl_ms=10_000, expiration_threshold_ms=2000))

    assert entry.metadata.expires_at == entry.metadata.created_at + 8000


def test_create_entry_with_negative_ttl_never_expires():
    entry = create_cache_entry("test-string", CacheOptions(ttl_ms=-1), now=NOW)

    assert entry.metadata.ttl_ms == -1
    assert entry.metadata.expires_at == NEVER_EXPIRES


def test_create_entry_stamps_current_time():
    before = now_ms()
    entry = create_cache_entry("test", CacheOptions(ttl_ms=5000))
    after = now_ms()

    assert before <= entry.metadata.created_at <= after


def test_create_entry_threshold_larger_than_ttl_is_immediately_expired():
    entry = create_cache_entry("x", CacheOptions(ttl_ms=1000, expiration_threshold_ms=5000), now=NOW)

    assert entry.metadata.expires_at == NOW - 4000
    assert is_expired(entry.metadata, now=NOW)


@pytest.mark.parametrize("value", [None, True, False, 0, 42, "string", {"key": "value"}, [1, 2, 3]])
def test_create_entry_keeps_any_value(value):
    entry = create_cache_entry(value, CacheOptions(ttl_ms=5000))

    assert entry.data is value
    assert entry.metadata is not None


def test_missing_metadata_is_expired():
    assert is_expired(None) is True


@pytest.mark.parametrize("elapsed", [0, 1, 10**6, 10**12])
def test_negative_expires_at_never_expires(elapsed):
    metadata = _metadata(ttl_ms=-1, expires_at=-1)

    assert is_expired(metadata, now=NOW + elapsed) is False


def test_not_expired_before_expiry():
    assert is_expired(_metadata(expires_at=NOW + 10_000), now=NOW) is False


def test_expired_after_expiry():
    assert is_expired(_metadata(created_at=NOW - 20_000, expires_at=NOW - 10_000), now=NOW) is True


def test_expiry_instant_counts_as_expired():
    metadata = _metadata(expires_at=NOW)

    assert is_expired(metadata, now=NOW - 1) is False
    assert is_expired(metadata, now=NOW) is True


def test_threshold_moves_expiry_earlier():
    entry = create_cache_entry("v", CacheOptions(ttl_ms=10_000, expiration_threshold_ms=2000), now=NOW)

    assert is_expired(entry.metadata, now=NOW + 7999) is False
    assert is_expired(entry.metadata, now=NOW + 8000) is True


def test_zero_ttl_is_expired_at_creation():
    entry = create_cache_entry("v", CacheOptions(ttl_ms=0), now=NOW)

    assert is_expired(entry.metadata, now=NOW) is True


def test_missing_expires_at_falls_back_to_ttl():
    assert is_expired(_metadata(created_at=NOW - 5000, ttl_ms=10_000), now=NOW) is False
    assert is_expired(_metadata(created_at=NOW - 20_000, ttl_ms=10_000), now=NOW) is True


def test_missing_expires_at_and_ttl_fails_closed():
    assert is_expired(_metadata(created_at=NOW, ttl_ms=None), now=NOW) is True
    assert is_expired(_metadata(created_at=None, ttl_ms=10_000), now=NOW) is True


def test_foreign_mapping_metadata():
    assert is_expired({"createdAt": NOW, "ttlMs": 10_000, "expiresAt": NOW + 10_000}, now=NOW) is False
    assert is_expired({"created_at": NOW - 20_000, "ttl_ms": 10_000}, now=NOW) is True
    assert is_expired({}, now=NOW) is True


def test_is_expired_reads_clock_when_now_not_given(mocker):
    mocker.patch.object(expiration, "now_ms", return_value=NOW + 10_000)

    assert is_expired(_metadata(expires_at=NOW + 10_000)) is True
    assert is_expired(_metadata(expires_at=NOW + 10_001)) is False
