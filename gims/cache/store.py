"""In-memory response cache.

Entries live for the duration of the process. Capacity is bounded by entry
count; when full, the oldest inserted entry is evicted (reads do not
refresh an entry's position). Entries older than the freshness window are
reported as misses.
"""

import time
from typing import Callable, Optional

from loguru import logger

from gims.cache.models import CacheEntry
from gims.config import DEFAULT_CACHE_MAX_ENTRIES, DEFAULT_CACHE_TTL_SECONDS
from gims.models import CommitMessage


class ResponseCache:
    """Bounded, time-limited cache of normalized commit messages.

    Args:
        max_entries: Maximum number of entries kept.
        ttl_seconds: Freshness window; older entries are misses.
        enabled: When False, get() always misses and put() stores nothing.
        clock: Returns the current time in seconds (time.time by default).
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        enabled: bool = True,
        clock: Callable[[], float] = time.time,
    ):
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self.enabled = enabled
        self._clock = clock
        # dicts preserve insertion order, which is the eviction order
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, fingerprint: str) -> bool:
        return fingerprint in self._entries

    def get(self, fingerprint: str) -> Optional[CacheEntry]:
        """Return the fresh entry for a fingerprint, or None."""
        if not self.enabled:
            return None

        entry = self._entries.get(fingerprint)
        if entry is None:
            return None

        if entry.age(self._clock()) >= self.ttl_seconds:
            logger.debug(f"Cache entry {fingerprint[:12]} expired")
            return None

        return entry

    def put(self, fingerprint: str, message: CommitMessage, used_local: bool = False) -> None:
        """Store a message, evicting the oldest entry if the cache is full."""
        if not self.enabled or self.max_entries <= 0:
            return

        if fingerprint not in self._entries and len(self._entries) >= self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug(f"Cache full, evicted {oldest[:12]}")

        self._entries[fingerprint] = CacheEntry(
            message=message,
            used_local=used_local,
            timestamp=self._clock(),
        )

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()
