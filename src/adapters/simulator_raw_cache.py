"""
In-memory RawDataCache for testing — no filesystem required.
"""

from src.domain.raw_cache import CacheRecord, RawDataCache


class InMemoryRawDataCache(RawDataCache):

    def __init__(self):
        self._store: dict[str, CacheRecord] = {}
        self.writes = 0

    def read(self, key: str) -> CacheRecord | None:
        return self._store.get(key)

    def write(self, key: str, record: CacheRecord) -> bool:
        self._store[key] = record
        self.writes += 1
        return True
