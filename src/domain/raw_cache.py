"""
RawDataCache port — stores the vendor's raw payload with a fetch timestamp.

The cache is a re-derivable artifact, never a source of truth: adapters
swallow their own I/O errors (a failed read is a miss, a failed write is
logged) so a broken cache can only cost an extra upstream call.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class CacheRecord:
    timestamp: int  # epoch milliseconds
    data: dict

    def to_dict(self) -> dict:
        return {"timestamp": self.timestamp, "data": self.data}

    @classmethod
    def from_dict(cls, obj) -> "CacheRecord | None":
        """Return a record, or None if obj is not a usable {timestamp, data} pair."""
        if not isinstance(obj, dict):
            return None
        ts = obj.get("timestamp")
        if isinstance(ts, bool) or not isinstance(ts, (int, float)):
            return None
        if isinstance(ts, float) and not math.isfinite(ts):
            return None
        return cls(timestamp=int(ts), data=obj.get("data"))


def is_fresh(record: CacheRecord | None, timeout_ms: int, now_ms: int) -> bool:
    """
    A record is fresh while its age is strictly below the timeout. 0 disables
    caching. A record stamped in the future (clock change, edited file) is stale.
    """
    if record is None or timeout_ms <= 0:
        return False
    age = now_ms - record.timestamp
    return 0 <= age < timeout_ms


class RawDataCache(ABC):
    """Port: keyed storage of CacheRecords."""

    @abstractmethod
    def read(self, key: str) -> CacheRecord | None:
        """Return the stored record, or None on miss (including unreadable storage)."""
        ...

    @abstractmethod
    def write(self, key: str, record: CacheRecord) -> bool:
        """Persist the record. Returns False on failure; never raises."""
        ...
