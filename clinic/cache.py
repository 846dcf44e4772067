"""
In-memory key/value cache with a fixed time-to-live.

Entries are evicted lazily: ``get`` drops an entry it finds expired, and
``invalidate``/``clear`` drop entries explicitly.  There is no background
sweep.  ``stats`` is a read-only scan and never evicts anything, so the
gap between ``total_entries`` and ``valid_entries`` shows how many stale
entries are still waiting for their next read.
"""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

V = TypeVar('V')

DEFAULT_TTL_SECONDS = 5 * 60


@dataclass
class CacheEntry(Generic[V]):
    key: str
    value: V
    stored_at: float
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now <= self.expires_at


@dataclass(frozen=True)
class CacheStats:
    total_entries: int
    valid_entries: int
    expired_entries: int

    def as_dict(self) -> dict:
        return {
            'totalEntries': self.total_entries,
            'validEntries': self.valid_entries,
            'expiredEntries': self.expired_entries,
        }


class ExpiringCache(Generic[V]):
    """Process-local cache; each entry lives for ``ttl`` seconds after ``set``."""

    def __init__(self, ttl: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.time):
        if ttl < 0:
            raise ValueError('ttl must be >= 0')
        self.ttl = float(ttl)
        self._clock = clock
        self._entries: Dict[str, CacheEntry[V]] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: V) -> None:
        now = self._clock()
        with self._lock:
            self._entries[key] = CacheEntry(key=key, value=value, stored_at=now, expires_at=now + self.ttl)

    def get(self, key: str, default: Any = None) -> Optional[V]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if not entry.is_valid(now):
                del self._entries[key]
                return default
            return entry.value

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> CacheStats:
        now = self._clock()
        with self._lock:
            total = len(self._entries)
            valid = sum(1 for entry in self._entries.values() if entry.is_valid(now))
        return CacheStats(total_entries=total, valid_entries=valid, expired_entries=total - valid)
