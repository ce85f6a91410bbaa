"""
JSON file adapters for RawDataCache.

JsonFileCache keeps one slot:       {"timestamp": ..., "data": ...}
DayKeyedJsonFileCache keeps a map:  {"byDay": {"2025-08-10": {"timestamp": ..., "data": ...}}}

Reads of a missing or corrupt file are misses. Writes replace the whole file
through a temporary file, so a reader never sees half a document; concurrent
writers still race and the last one wins.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from src.domain.errors import CacheReadError, CacheWriteError
from src.domain.raw_cache import CacheRecord, RawDataCache

log = logging.getLogger(__name__)


def _load(path: Path) -> dict:
    try:
        obj = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise CacheReadError(f"{path} does not exist") from exc
    except (OSError, ValueError) as exc:
        raise CacheReadError(f"{path} unreadable: {exc}") from exc
    if not isinstance(obj, dict):
        raise CacheReadError(f"{path} does not hold a JSON object")
    return obj


def _dump(path: Path, obj: dict) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(obj, f)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
    except (OSError, TypeError, ValueError) as exc:
        raise CacheWriteError(f"{path}: {exc}") from exc


class JsonFileCache(RawDataCache):
    """Single-record cache. The key is accepted for the port but there is one slot."""

    def __init__(self, path: str = "cache.json"):
        self.path = Path(path)

    def read(self, key: str) -> CacheRecord | None:
        try:
            return CacheRecord.from_dict(_load(self.path))
        except CacheReadError as exc:
            log.debug("[cache] miss: %s", exc)
            return None

    def write(self, key: str, record: CacheRecord) -> bool:
        try:
            _dump(self.path, record.to_dict())
        except CacheWriteError as exc:
            log.error("[cache] write failed: %s", exc)
            return False
        log.info("[cache] updated %s ts=%d", self.path, record.timestamp)
        return True


class DayKeyedJsonFileCache(RawDataCache):
    """One record per day (or month) key, all kept in one file under "byDay"."""

    def __init__(self, path: str = "cache.json"):
        self.path = Path(path)

    def _entries(self) -> dict:
        try:
            by_day = _load(self.path).get("byDay")
        except CacheReadError as exc:
            log.debug("[cache] miss: %s", exc)
            return {}
        return by_day if isinstance(by_day, dict) else {}

    def read(self, key: str) -> CacheRecord | None:
        return CacheRecord.from_dict(self._entries().get(key))

    def write(self, key: str, record: CacheRecord) -> bool:
        entries = self._entries()
        entries[key] = record.to_dict()
        try:
            _dump(self.path, {"byDay": entries})
        except CacheWriteError as exc:
            log.error("[cache] write failed: %s", exc)
            return False
        log.info("[cache] updated %s key=%s ts=%d", self.path, key, record.timestamp)
        return True
