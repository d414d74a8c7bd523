"""In-memory TTL cache backend implementation."""

import logging
import math
import time
from collections.abc import Callable
from typing import Any, TypeVar

from cachetools import Cache  # type: ignore[import-untyped]

from adrecord.core.entities.cache_config import CacheConfig
from adrecord.core.entities.cache_entry import CacheEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TTLCacheBackend:
    """Timed record cache with lazy, amortized expiry.

    Every entry remembers when it was stored. A lookup never returns
    an entry older than ``timeout`` seconds: the entry is evicted and
    the lookup is a miss. Besides that per-key check, a full sweep of
    stale entries runs as a side effect of lookups, at most once per
    ``check_interval`` seconds, so an idle cache with active lookups
    stays bounded without a background timer.

    Storage is a ``cachetools.Cache``, which also enforces the optional
    ``max_size`` bound.

    Writes can be suspended with ``pause`` or, scoped, with
    ``pause_for``. Pausing is a plain toggle and is not reentrant: a
    nested ``pause_for`` unpauses the cache for the outer scope too.

    The cache has no internal locking.
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        timer: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the cache.

        Args:
            config: Timeout and sweep settings. Uses defaults if not provided.
            timer: Clock returning seconds; values are truncated to whole seconds.
        """
        self._config = config or CacheConfig()
        self._timer = timer
        maxsize = self._config.max_size if self._config.max_size else math.inf
        self._store: Cache[str, CacheEntry] = Cache(maxsize=maxsize)
        self._paused = False
        self._last_sweep = self._now()

        # Statistics
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, evictions and total lookups.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "evictions": self._evictions,
            "total": self._hits + self._misses,
        }

    @property
    def paused(self) -> bool:
        """Return True while writes are suppressed."""
        return self._paused

    def pause(self) -> None:
        """Suppress writes until ``unpause`` is called."""
        self._paused = True

    def unpause(self) -> None:
        """Re-enable writes."""
        self._paused = False

    def pause_for(self, body: Callable[[], T]) -> T:
        """Run ``body`` with writes suppressed.

        Reads keep working while paused. The cache is always unpaused
        afterwards, even when ``body`` raises.

        Args:
            body: The callable to run.

        Returns:
            Whatever ``body`` returns.
        """
        self.pause()
        try:
            return body()
        finally:
            self.unpause()

    def set(self, key: str, value: Any) -> None:
        """Store a value stamped with the current time.

        Does nothing while the cache is paused.

        Args:
            key: The cache key.
            value: The value to store.
        """
        if self._paused:
            return
        self._store[key] = CacheEntry(stored_at=self._now(), value=value)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def get(self, key: str, callback: Callable[[Any], Any] | None = None) -> Any | None:
        """Retrieve a cached value by key.

        An expired entry is evicted and reported as a miss.

        Args:
            key: The cache key to retrieve.
            callback: Optional callable invoked with the value (or None on
                a miss); when given, nothing is returned.

        Returns:
            The cached value, or None if not found, expired, or a
            callback was given.
        """
        if self.invalidate(key):
            self.remove(key)
            self._evictions += 1
            value = None
        else:
            entry = self._store.get(key)
            value = entry.value if entry is not None else None

        if value is None:
            self._misses += 1
        else:
            self._hits += 1

        if callback is None:
            return value

        callback(value)
        return None

    def __getitem__(self, key: str) -> Any | None:
        return self.get(key)

    def remove(self, key: str) -> None:
        """Delete a cached value; missing keys are ignored."""
        self._store.pop(key, None)

    def clear(self) -> None:
        """Empty the store. The sweep timer is left untouched."""
        self._store.clear()

    def invalidate(self, key: str) -> bool:
        """Check whether the entry under ``key`` has expired.

        Runs the periodic sweep first, when one is due.

        Args:
            key: The cache key to check.

        Returns:
            True if an entry exists and is stale, False otherwise.
        """
        self.check_for_invalids()

        entry = self._store.get(key)
        if entry is None:
            return False
        return entry.is_expired(self._now(), self._config.timeout)

    def check_for_invalids(self) -> int:
        """Sweep stale entries if ``check_interval`` seconds have passed.

        Returns:
            Number of entries removed by this call.
        """
        now = self._now()
        if now - self._last_sweep <= self._config.check_interval:
            return 0

        stale = [
            key
            for key, entry in list(self._store.items())
            if entry.is_expired(now, self._config.timeout)
        ]
        for key in stale:
            self._store.pop(key, None)

        self._last_sweep = now
        self._evictions += len(stale)
        if stale:
            logger.debug("Swept %d stale cache entries", len(stale))
        return len(stale)

    def keys(self) -> list[str]:
        """Return the stored keys, stale or not."""
        return list(self._store.keys())

    def __contains__(self, key: object) -> bool:
        """Check raw presence of a key, without any expiry check."""
        return key in self._store

    def __len__(self) -> int:
        """Return the number of stored entries, stale or not."""
        return len(self._store)

    def _now(self) -> int:
        return int(self._timer())
