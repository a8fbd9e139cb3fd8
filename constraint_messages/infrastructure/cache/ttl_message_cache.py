"""In-memory message cache with write-time expiry.

Resolving a message may walk type hints and signatures, so resolved
messages are memoized per (property path, constraint descriptor). The same
malformed field on every request then costs a dictionary lookup.

Entries expire a fixed time after they were written. Reads never extend
an entry's lifetime. With `max_entries` set, the oldest-written entry is
evicted first once the cache is full, which keeps memory bounded when
clients send many distinct violation shapes.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Hashable

from constraint_messages.domain.repositories.message_cache import IMessageCache

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60


@dataclass
class _CacheEntry:
    message: str
    expires_at: float


class TTLMessageCache(IMessageCache):
    """
    Thread-safe expiring map of resolved messages.

    Limitations:
    - Data lost on restart
    - Per-process, not shared between workers

    Usage:
        cache = TTLMessageCache(ttl_seconds=3600, max_entries=10_000)
        message = cache.get_or_compute(violation.cache_key, compute)
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize cache.

        Args:
            ttl_seconds: Lifetime of an entry, counted from its write
            max_entries: Upper bound on stored entries (None or 0 for unbounded)
            clock: Monotonic time source in seconds (injectable for tests)
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries is not None and max_entries < 0:
            raise ValueError("max_entries must not be negative")

        self._ttl = ttl_seconds
        self._max_entries = max_entries or None
        self._clock = clock

        # Insertion ordered: the first key is always the oldest write
        self._entries: dict[Hashable, _CacheEntry] = {}

        # Lock for thread-safe operations
        self._lock = threading.Lock()

    def get_or_compute(self, key: Hashable, compute: Callable[[], str]) -> str:
        """
        Return the cached message for `key`, computing it on a miss.

        `compute` runs outside the lock, so a slow or failing computation
        never blocks other keys. Exceptions from `compute` propagate and
        nothing is cached.
        """
        cached = self.get(key)
        if cached is not None:
            return cached

        logger.debug(f"Message cache miss for {key!r}")
        message = compute()
        self.put(key, message)
        return message

    def get(self, key: Hashable) -> str | None:
        """Get a live entry, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry.message

    def put(self, key: Hashable, message: str) -> None:
        """Store a message, restarting its time-to-live."""
        with self._lock:
            # Re-inserting moves the key to the end of the write order
            self._entries.pop(key, None)
            self._entries[key] = _CacheEntry(message, self._clock() + self._ttl)

            if self._max_entries is not None:
                while len(self._entries) > self._max_entries:
                    oldest = next(iter(self._entries))
                    del self._entries[oldest]

    def cleanup_expired(self) -> int:
        """
        Remove expired entries.

        Expired entries are also dropped lazily on read; this reclaims
        memory for keys that are never read again.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired = [k for k, e in self._entries.items() if e.expires_at <= now]
            for key in expired:
                del self._entries[key]

        if expired:
            logger.info(f"Cleaned up {len(expired)} expired messages")
        return len(expired)

    def get_stats(self) -> dict[str, int]:
        """
        Get cache statistics (useful for monitoring).

        Returns:
            Dictionary with entry counts
        """
        with self._lock:
            now = self._clock()
            total = len(self._entries)
            expired = sum(1 for e in self._entries.values() if e.expires_at <= now)

            return {
                "total_entries": total,
                "expired_entries": expired,
                "live_entries": total - expired,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
