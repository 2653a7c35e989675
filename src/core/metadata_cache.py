"""Time-to-idle, size-bounded cache for channel lookups.

Entries expire after ``idle_seconds`` without a read or write, independent of
how long ago they were inserted. When the cache is full the least recently
accessed entry is evicted first.

Concurrent misses for the same key are not coalesced: two tasks missing at the
same time both call ``fetch`` and the later write wins. Bookkeeping never spans
an ``await``, and the lock keeps it consistent if the cache is ever touched
from another thread.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Awaitable, Callable, Generic, Hashable, Optional, Tuple, TypeVar

from core.config import CacheConfig

LOGGER = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class IdleCache(Generic[K, V]):
    """LRU cache with per-entry idle expiry."""

    def __init__(
        self,
        max_entries: int = 100,
        idle_seconds: float = 3600,
        clock: Callable[[], float] = time.monotonic,
        name: str = "cache",
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        if idle_seconds <= 0:
            raise ValueError("idle_seconds must be positive")
        self._max_entries = max_entries
        self._idle_seconds = idle_seconds
        self._clock = clock
        self._name = name
        self._entries: "OrderedDict[K, Tuple[V, float]]" = OrderedDict()
        self._lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        config: CacheConfig,
        name: str = "cache",
        clock: Callable[[], float] = time.monotonic,
    ) -> "IdleCache[K, V]":
        return cls(
            max_entries=config.max_entries,
            idle_seconds=config.idle_seconds,
            clock=clock,
            name=name,
        )

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired(self._clock())
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            entry = self._entries.get(key)  # type: ignore[arg-type]
            if entry is None:
                return False
            return not self._is_expired(entry[1], self._clock())

    def get(self, key: K) -> Optional[V]:
        """Return the cached value and refresh its idle timer, or None on miss."""

        with self._lock:
            now = self._clock()
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, last_access = entry
            if self._is_expired(last_access, now):
                del self._entries[key]
                return None
            self._entries[key] = (value, now)
            self._entries.move_to_end(key)
            return value

    def put(self, key: K, value: V) -> None:
        """Store ``value``, evicting the least recently used entry when full."""

        with self._lock:
            now = self._clock()
            self._entries[key] = (value, now)
            self._entries.move_to_end(key)
            self._purge_expired(now)
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                LOGGER.debug("%s evicted %s (capacity %s)", self._name, evicted, self._max_entries)

    def invalidate(self, key: K) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    async def get_or_fetch(self, key: K, fetch: Callable[[], Awaitable[V]]) -> V:
        """Return the cached value for ``key`` or await ``fetch`` exactly once.

        A failing fetch propagates its exception and leaves the cache untouched.
        """

        cached = self.get(key)
        if cached is not None:
            LOGGER.debug("%s hit for %s", self._name, key)
            return cached

        LOGGER.debug("%s miss for %s", self._name, key)
        value = await fetch()
        self.put(key, value)
        return value

    def _is_expired(self, last_access: float, now: float) -> bool:
        return now - last_access >= self._idle_seconds

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, (_, last_access) in self._entries.items() if self._is_expired(last_access, now)]
        for key in expired:
            del self._entries[key]
