"""Thread-safe response cache with lazy TTL expiry."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Any

DEFAULT_TTL = 5 * 60.0  # seconds


def cache_key(namespace: str, symbol: str) -> str:
    """Compound key so different operations on one symbol never collide."""
    return f"{namespace}:{symbol.strip().upper()}"


@dataclass(frozen=True, slots=True)
class CacheEntry:
    data: Any
    timestamp: float


class ResponseCache:
    """Time-expiring memo in front of the market data provider.

    Shared by the search pipeline and the refresh scheduler. Entries are
    replaced, never mutated. There is no capacity bound and no background
    sweep: an expired entry is only dropped when a lookup touches it.
    """

    def __init__(self, ttl: float = DEFAULT_TTL, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._lock = Lock()
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None if missing or expired.

        An expired entry is evicted as a side effect.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.timestamp < self._ttl:
                return entry.data
            del self._entries[key]
            return None

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(data=value, timestamp=self._clock())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        # Counts expired-but-not-yet-evicted entries too.
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and self._clock() - entry.timestamp < self._ttl
