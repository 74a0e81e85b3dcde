"""
In-memory cache-aside store with single-flight computation per key.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _CacheEntry:
    """A computation shared by every caller of one key."""

    def __init__(self, task: asyncio.Task):
        self.task = task
        self.waiters = 0
        self.expires_at: Optional[float] = None


class ApiCache:
    """
    Memoizes async results by string key.

    Guarantees:
    - Only one computation runs per key at a time (single-flight)
    - Concurrent callers share the in-flight computation
    - Failed or cancelled computations are evicted so a later call retries
    - Results expire `duration_seconds` after completion (0 = never)
    """

    def __init__(
        self,
        duration_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize API cache.

        Args:
            duration_seconds: Lifetime of a computed value (0 disables expiry)
            clock: Monotonic time source, injectable for tests
        """
        self.duration_seconds = duration_seconds
        self._clock = clock
        self._entries: Dict[str, _CacheEntry] = {}

        # Stats
        self.stats = {"hits": 0, "misses": 0}

    async def get_or_add(self, key: str, factory: Callable[[], Awaitable[T]]) -> T:
        """
        Return the cached value for `key`, computing it with `factory` if absent.

        Args:
            key: Cache key
            factory: Zero-argument callable returning an awaitable value

        Returns:
            The cached or freshly computed value

        Raises:
            Whatever `factory` raises; asyncio.CancelledError if cancelled
        """
        entry = self._entries.get(key)
        if entry is not None and self._is_expired(entry):
            logger.debug(f"Cache entry expired: {key}")
            del self._entries[key]
            entry = None

        if entry is None:
            self.stats["misses"] += 1
            logger.debug(f"Cache miss: {key}")
            entry = _CacheEntry(asyncio.ensure_future(factory()))
            entry.task.add_done_callback(lambda task: self._on_done(key, entry, task))
            self._entries[key] = entry
        else:
            self.stats["hits"] += 1

        entry.waiters += 1
        try:
            return await asyncio.shield(entry.task)
        except asyncio.CancelledError:
            # Abandon the load only when nobody else is waiting for it
            if entry.waiters == 1 and not entry.task.done():
                logger.debug(f"Cancelling abandoned computation: {key}")
                entry.task.cancel()
                self._evict(key, entry)
            raise
        finally:
            entry.waiters -= 1

    def invalidate(self, key: str) -> bool:
        """
        Drop a cached value.

        Args:
            key: Cache key

        Returns:
            True if an entry was removed
        """
        return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        """
        Drop every cached value.

        Returns:
            Number of entries cleared
        """
        count = len(self._entries)
        self._entries.clear()
        return count

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.task.done() and not self._is_expired(entry)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dict with cache stats
        """
        lookups = self.stats["hits"] + self.stats["misses"]
        return {
            **self.stats,
            "entries": len(self._entries),
            "hit_rate": self.stats["hits"] / lookups if lookups > 0 else 0.0,
        }

    def _is_expired(self, entry: _CacheEntry) -> bool:
        if entry.expires_at is None:
            return False
        return self._clock() >= entry.expires_at

    def _evict(self, key: str, entry: _CacheEntry) -> None:
        if self._entries.get(key) is entry:
            del self._entries[key]

    def _on_done(self, key: str, entry: _CacheEntry, task: asyncio.Task) -> None:
        if task.cancelled():
            self._evict(key, entry)
        elif task.exception() is not None:
            logger.debug(f"Computation failed, evicting: {key}")
            self._evict(key, entry)
        elif self.duration_seconds > 0:
            entry.expires_at = self._clock() + self.duration_seconds
