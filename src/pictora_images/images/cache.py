"""
In-memory image cache.

A bounded LRU store of decoded images keyed by URL. One ordered map holds
both the entries and their recency order; one lock serializes every read and
write so concurrent coordinators never see a torn view.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from datetime import timedelta
from typing import TYPE_CHECKING

from ..logging import get_logger
from .base import CacheEntry, CacheStats, DecodedImage

if TYPE_CHECKING:
    from ..config import Settings

DEFAULT_MAX_ENTRIES = 100
DEFAULT_MAX_COST = 1024 * 1024 * 1000

logger = get_logger("cache")


class ImageCache:
    """Capacity and cost bounded LRU cache of decoded images."""

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        max_cost: int = DEFAULT_MAX_COST,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the image cache.

        Args:
            max_entries: Maximum number of cached images
            max_cost: Maximum total estimated byte cost of cached images
            clock: Source of timestamps for last-access tracking

        Raises:
            ValueError: If either limit is not positive
        """
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        if max_cost <= 0:
            raise ValueError("max_cost must be positive")

        self.max_entries = max_entries
        self.max_cost = max_cost
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._total_cost = 0
        self._lock = threading.RLock()
        self._stats = CacheStats(max_entries=max_entries, max_cost=max_cost)

        logger.debug(
            "ImageCache initialized: max_entries={}, max_cost={}", max_entries, max_cost
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> ImageCache:
        """Build a cache sized from application settings."""
        return cls(
            max_entries=settings.cache_max_entries,
            max_cost=settings.cache_max_cost_bytes,
        )

    def put(self, key: str, image: DecodedImage) -> None:
        """
        Insert or overwrite the image for a key.

        Least-recently-used entries are evicted until both the entry count
        and the cost budget hold. Invalid images are ignored. An image that
        alone exceeds the cost budget is not stored, and any older payload
        for the key is removed so it cannot be served stale.

        Args:
            key: Resource identifier (image URL)
            image: Decoded image to cache
        """
        if not isinstance(image, DecodedImage) or not image.is_valid:
            logger.warning("Ignoring invalid image for cache key: {}", key)
            return

        cost = image.cost
        with self._lock:
            # Any older payload for the key is dropped even if the new one is not kept
            self._discard(key)
            if cost > self.max_cost:
                logger.warning(
                    "Image too large to cache: {} ({} bytes > {} bytes)", key, cost, self.max_cost
                )
                return

            self._entries[key] = CacheEntry(
                key=key, payload=image, last_accessed=self._clock(), cost=cost
            )
            self._total_cost += cost

            while len(self._entries) > self.max_entries or self._total_cost > self.max_cost:
                evicted_key, evicted = self._entries.popitem(last=False)
                self._total_cost -= evicted.cost
                self._stats.evictions += 1
                logger.debug("Evicted from image cache: {}", evicted_key)

            logger.debug(
                "Added to image cache: {} (count={}, cost={})",
                key,
                len(self._entries),
                self._total_cost,
            )

    def get(self, key: str) -> DecodedImage | None:
        """
        Return the cached image for a key and mark it most recently used.

        Args:
            key: Resource identifier (image URL)

        Returns:
            The cached DecodedImage, or None on a miss
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._stats.misses += 1
                logger.debug("Image not found in cache: {}", key)
                return None

            entry.touch(self._clock())
            self._entries.move_to_end(key)
            self._stats.hits += 1
            logger.debug("Returned image from cache: {}", key)
            return entry.payload

    def remove(self, key: str) -> None:
        """Remove the entry for a key; a missing key is ignored."""
        with self._lock:
            if self._discard(key):
                logger.debug("Removed from image cache: {}", key)

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()
            self._total_cost = 0
        logger.debug("Image cache cleared")

    def evict_older_than(self, max_age: float | timedelta) -> int:
        """
        Remove entries not accessed within ``max_age``.

        An entry survives while ``now - last_accessed <= max_age``.

        Args:
            max_age: Maximum idle time in seconds, or a timedelta

        Returns:
            Number of entries removed
        """
        if isinstance(max_age, timedelta):
            max_age = max_age.total_seconds()

        with self._lock:
            now = self._clock()
            stale = [
                key
                for key, entry in self._entries.items()
                if now - entry.last_accessed > max_age
            ]
            for key in stale:
                self._discard(key)

        if stale:
            logger.debug("Swept {} stale images from cache", len(stale))
        return len(stale)

    def keys(self) -> list[str]:
        """Snapshot of cached keys from least to most recently used."""
        with self._lock:
            return list(self._entries)

    @property
    def total_cost(self) -> int:
        """Estimated byte cost of all cached images."""
        with self._lock:
            return self._total_cost

    @property
    def stats(self) -> CacheStats:
        """Get a snapshot of cache statistics."""
        with self._lock:
            return self._stats.model_copy(
                update={"size": len(self._entries), "total_cost": self._total_cost}
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        """Check if key exists (doesn't update LRU order)."""
        with self._lock:
            return key in self._entries

    def _discard(self, key: str) -> bool:
        # Caller holds the lock.
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        self._total_cost -= entry.cost
        return True
