"""
Fetcher behaviour: cache-first, fetch on miss or stale, best-effort refresh,
no stale fallback on vendor failure.

Uses simulators only — no network, no filesystem.
"""

import pytest

from src.adapters.ports import VendorQuery
from src.adapters.simulator_raw_cache import InMemoryRawDataCache
from src.adapters.simulator_vendor import SimulatorVendorGateway
from src.domain.errors import UpstreamHTTPError, UpstreamParseError
from src.domain.raw_cache import CacheRecord, RawDataCache
from src.fetcher import Fetcher, FetcherConfig

KEY = "2025-08-10"
QUERY = VendorQuery(KEY, KEY)
FRESH_PAYLOAD = {"BookingList": [{"ReservationNo": "new"}]}
CACHED_PAYLOAD = {"BookingList": [{"ReservationNo": "cached"}]}


class Clock:

    def __init__(self, now: int = 1_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now


class BrokenCache(RawDataCache):
    """Reads miss and writes fail, like a read-only cache file."""

    def read(self, key):
        return None

    def write(self, key, record):
        return False


@pytest.fixture
def gateway():
    return SimulatorVendorGateway(FRESH_PAYLOAD, payload_format="bookings")


@pytest.fixture
def cache():
    return InMemoryRawDataCache()


@pytest.fixture
def clock():
    return Clock()


def _fetcher(gateway, cache, clock, timeout_ms=60_000):
    return Fetcher(FetcherConfig(gateway=gateway, cache=cache, timeout_ms=timeout_ms, clock=clock))


def test_fresh_cache_hit_skips_vendor(gateway, cache, clock):
    cache.write(KEY, CacheRecord(timestamp=clock.now - 1000, data=CACHED_PAYLOAD))

    data = _fetcher(gateway, cache, clock).fetch_data(KEY, QUERY)

    assert data == CACHED_PAYLOAD
    assert gateway.calls == 0


def test_miss_fetches_and_stores(gateway, cache, clock):
    data = _fetcher(gateway, cache, clock).fetch_data(KEY, QUERY)

    assert data == FRESH_PAYLOAD
    assert gateway.calls == 1
    stored = cache.read(KEY)
    assert stored.data == FRESH_PAYLOAD
    assert stored.timestamp == clock.now


def test_stale_record_is_refetched(gateway, cache, clock):
    cache.write(KEY, CacheRecord(timestamp=clock.now - 60_000, data=CACHED_PAYLOAD))

    data = _fetcher(gateway, cache, clock, timeout_ms=60_000).fetch_data(KEY, QUERY)

    assert data == FRESH_PAYLOAD
    assert gateway.calls == 1


def test_record_stamped_in_the_future_is_refetched(gateway, cache, clock):
    cache.write(KEY, CacheRecord(timestamp=clock.now + 10**9, data=CACHED_PAYLOAD))

    data = _fetcher(gateway, cache, clock).fetch_data(KEY, QUERY)

    assert data == FRESH_PAYLOAD
    assert cache.read(KEY).timestamp == clock.now


def test_second_call_within_timeout_hits_cache(gateway, cache, clock):
    fetcher = _fetcher(gateway, cache, clock)
    fetcher.fetch_data(KEY, QUERY)
    clock.now += 59_999
    fetcher.fetch_data(KEY, QUERY)

    assert gateway.calls == 1


def test_zero_timeout_always_calls_vendor(gateway, cache, clock):
    cache.write(KEY, CacheRecord(timestamp=clock.now, data=CACHED_PAYLOAD))
    fetcher = _fetcher(gateway, cache, clock, timeout_ms=0)

    assert fetcher.fetch_data(KEY, QUERY) == FRESH_PAYLOAD
    assert fetcher.fetch_data(KEY, QUERY) == FRESH_PAYLOAD
    assert gateway.calls == 2


def test_keys_are_cached_independently(gateway, cache, clock):
    fetcher = _fetcher(gateway, cache, clock)
    fetcher.fetch_data("2025-08-10", VendorQuery("2025-08-10", "2025-08-10"))
    fetcher.fetch_data("2025-08-11", VendorQuery("2025-08-11", "2025-08-11"))

    assert gateway.calls == 2
    assert [q.arrival_from for q in gateway.queries] == ["2025-08-10", "2025-08-11"]


def test_vendor_error_propagates_without_stale_fallback(gateway, cache, clock):
    cache.write(KEY, CacheRecord(timestamp=clock.now - 10**7, data=CACHED_PAYLOAD))
    gateway.fail_with(UpstreamHTTPError(503, "maintenance"))

    with pytest.raises(UpstreamHTTPError) as exc_info:
        _fetcher(gateway, cache, clock).fetch_data(KEY, QUERY)

    assert exc_info.value.status_code == 503
    assert cache.read(KEY).data == CACHED_PAYLOAD


def test_parse_error_propagates(gateway, cache, clock):
    gateway.fail_with(UpstreamParseError("<html>"))

    with pytest.raises(UpstreamParseError):
        _fetcher(gateway, cache, clock).fetch_data(KEY, QUERY)
    assert cache.writes == 0


def test_cache_write_failure_does_not_fail_the_call(gateway, clock):
    data = _fetcher(gateway, BrokenCache(), clock).fetch_data(KEY, QUERY)

    assert data == FRESH_PAYLOAD
