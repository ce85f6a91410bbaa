"""
Cache-first access to the vendor payload.

    1. read the cache; a fresh record is returned without a network call
    2. otherwise fetch from the vendor and refresh the cache (best effort)
    3. vendor failures propagate; stale data is never served
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from src.adapters.ports import VendorGateway, VendorQuery
from src.domain.raw_cache import CacheRecord, RawDataCache, is_fresh

log = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class FetcherConfig:
    gateway: VendorGateway
    cache: RawDataCache
    timeout_ms: int = 0
    clock: Callable[[], int] = field(default=_now_ms)


class Fetcher:

    def __init__(self, config: FetcherConfig):
        self._cfg = config

    def fetch_data(self, key: str, query: VendorQuery) -> dict:
        """Return the raw payload for key, from cache when fresh, else from the vendor."""
        cfg = self._cfg

        # timeout 0 disables caching: skip the read, still refresh the file
        if cfg.timeout_ms > 0:
            record = cfg.cache.read(key)
            now = cfg.clock()
            if is_fresh(record, cfg.timeout_ms, now):
                log.info("[cache] hit for %s (age %dms)", key, now - record.timestamp)
                return record.data
            log.info("[cache] %s for %s", "stale" if record else "miss", key)

        data = cfg.gateway.fetch(query)

        if not cfg.cache.write(key, CacheRecord(timestamp=cfg.clock(), data=data)):
            log.warning("[cache] could not refresh %s, serving fresh payload anyway", key)
        return data
