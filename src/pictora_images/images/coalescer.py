"""
Key-level fetch coalescing.

Concurrent loads of the same URL share one in-flight fetch. Results and
errors are fanned out to every waiter and never stored here; caching stays
with the coordinators.
"""

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from typing import Generic, TypeVar

from ..logging import get_logger

T = TypeVar("T")

logger = get_logger("coalescer")


class FetchCoalescer(Generic[T]):
    """Single-flight runner: at most one in-flight fetch per key."""

    def __init__(self) -> None:
        self._in_flight: dict[Hashable, asyncio.Task[T]] = {}

    async def run(self, key: Hashable, fetcher: Callable[[], Awaitable[T]]) -> T:
        """
        Run ``fetcher`` for a key, or join the fetch already running for it.

        Cancelling one waiter does not cancel the shared fetch for the others.

        Args:
            key: Hashable identity of the fetch, e.g. a URL
            fetcher: Zero-argument coroutine function performing the fetch

        Returns:
            The fetch result

        Raises:
            Whatever the shared fetch raised
        """
        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(fetcher())
            self._in_flight[key] = task
            task.add_done_callback(lambda t, key=key: self._finished(key, t))
            logger.debug("Started shared fetch: {}", key)
        else:
            logger.debug("Joined in-flight fetch: {}", key)

        return await asyncio.shield(task)

    def in_flight(self, key: Hashable) -> bool:
        """Return True if a fetch for the key is running."""
        return key in self._in_flight

    def __len__(self) -> int:
        return len(self._in_flight)

    def _finished(self, key: Hashable, task: asyncio.Task) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        # Retrieve the exception so an unobserved failure is not reported as a leak
        if not task.cancelled():
            task.exception()
