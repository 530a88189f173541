"""
Periodic cache maintenance.

Sweeps entries that have not been accessed for a while so idle images do not
pin memory until the count or cost limits are reached.
"""

import asyncio
from datetime import timedelta

from ..logging import get_logger
from .cache import ImageCache

logger = get_logger("janitor")


class CacheJanitor:
    """Background task calling ``evict_older_than`` on an interval."""

    def __init__(
        self,
        cache: ImageCache,
        max_age: float | timedelta,
        interval: float = 300.0,
    ):
        """
        Initialize the janitor.

        Args:
            cache: Cache to sweep
            max_age: Idle time after which entries are removed
            interval: Seconds between sweeps
        """
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.cache = cache
        self.max_age = max_age
        self.interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start sweeping on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="image-cache-janitor")
        logger.debug("Cache janitor started: max_age={}, interval={}s", self.max_age, self.interval)

    async def stop(self) -> None:
        """Stop sweeping and wait for the task to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        await asyncio.wait([task])
        if not task.cancelled():
            task.result()
        logger.debug("Cache janitor stopped")

    def sweep(self) -> int:
        """Run one sweep immediately; returns the number of evicted entries."""
        removed = self.cache.evict_older_than(self.max_age)
        if removed:
            logger.info("Cache janitor evicted {} idle images", removed)
        return removed

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.sweep()

    async def __aenter__(self) -> "CacheJanitor":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
