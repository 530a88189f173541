"""
Per-consumer image loading.

An ImageFetchCoordinator resolves "the image for key K" for one consumer (a
view model, a grid cell, a CLI row): cache first, then network fetch and
decode, publishing every state transition to its listeners. A new request
cancels the previous one, and a cancelled request never publishes.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from ..logging import get_logger
from ..transport.base import FetchTransport, validate_url
from .base import DecodedImage, ImageState, LoadState
from .cache import ImageCache
from .coalescer import FetchCoalescer
from .decoder import ImageDecoder, PillowDecoder
from .errors import BadStatusError, ImageFetchError

StateListener = Callable[[ImageState], None]

logger = get_logger("coordinator")


class ImageFetchCoordinator:
    """Loads one image at a time for a single consumer."""

    def __init__(
        self,
        cache: ImageCache,
        transport: FetchTransport,
        decoder: ImageDecoder | None = None,
        coalescer: FetchCoalescer[DecodedImage] | None = None,
        listener: StateListener | None = None,
    ):
        """
        Initialize the coordinator.

        Args:
            cache: Process-wide image cache shared by all coordinators
            transport: Transport used on cache misses
            decoder: Decoder for response bodies (defaults to PillowDecoder)
            coalescer: Optional shared coalescer deduplicating fetches per URL
                among coordinators using the same transport and decoder
            listener: Optional first state listener
        """
        self.cache = cache
        self.transport = transport
        self.decoder = decoder or PillowDecoder()
        self.coalescer = coalescer
        self._listeners: list[StateListener] = []
        self._state = ImageState.idle()
        self._task: asyncio.Task | None = None

        if listener is not None:
            self.subscribe(listener)

    @property
    def state(self) -> ImageState:
        """The most recently published state."""
        return self._state

    @property
    def in_flight(self) -> bool:
        """Return True while a fetch is running."""
        return self._task is not None and not self._task.done()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a listener for state transitions.

        Returns:
            A callable that unsubscribes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def request(self, key: str) -> asyncio.Task | None:
        """
        Start loading the image for a key, superseding any earlier request.

        Must be called from a running event loop. A cache hit publishes the
        loaded state synchronously and returns None; otherwise the loading
        state is published and the fetch task is returned.

        Args:
            key: Resource identifier (image URL)

        Returns:
            The fetch task, or None on a cache hit
        """
        loop = asyncio.get_running_loop()
        self.cancel()

        cached = self.cache.get(key)
        if cached is not None:
            self._publish(ImageState.loaded(key, cached))
            return None

        self._publish(ImageState.loading(key))
        task = loop.create_task(self._load(key), name=f"image-fetch:{key[:60]}")
        task.add_done_callback(self._task_done)
        self._task = task
        return task

    async def load(self, key: str) -> ImageState:
        """
        Request a key and wait until the request settles.

        Returns:
            The coordinator state afterwards. If a newer request superseded
            this one, that request's current state is returned instead.
        """
        task = self.request(key)
        if task is not None:
            await asyncio.wait([task])
            if not task.cancelled():
                task.result()
        return self._state

    def cancel(self) -> None:
        """Abort the in-flight fetch without publishing any state."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            logger.debug("Cancelled image request: {}", self._state.key)

    def evict_from_cache(self) -> None:
        """Cancel any fetch, drop the current key from the cache and reset to idle."""
        self.cancel()
        key = self._state.key
        if key is not None:
            self.cache.remove(key)
        self._publish(ImageState.idle(key))

    def close(self) -> None:
        """Tear down the consumer binding: cancel and forget listeners."""
        self.cancel()
        self._listeners.clear()

    async def _load(self, key: str) -> None:
        try:
            if self.coalescer is not None:
                # Waiters only share a fetch that decodes the same way
                flight = (key, self.transport, self.decoder)
                image = await self.coalescer.run(flight, lambda: self._fetch(key))
            else:
                image = await self._fetch(key)
        except asyncio.CancelledError:
            logger.debug("Image request for {} observed cancellation", key)
            raise
        except ImageFetchError as e:
            logger.warning("Image request failed: {}", e)
            self._publish(ImageState.failed(key, e))
            return

        self.cache.put(key, image)
        self._publish(ImageState.loaded(key, image))

    async def _fetch(self, key: str) -> DecodedImage:
        validate_url(key)
        response = await self.transport.fetch(key)
        if not response.is_success:
            raise BadStatusError(key, response.status_code)
        return await asyncio.to_thread(
            self.decoder.decode, response.content, response.media_type, key
        )

    def _task_done(self, task: asyncio.Task) -> None:
        if self._task is task:
            self._task = None

    def _publish(self, state: ImageState) -> None:
        self._state = state
        if state.status is LoadState.LOADED:
            logger.debug("Image loaded: {}", state.key)
        for listener in list(self._listeners):
            listener(state)
