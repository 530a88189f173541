"""
Image caching package.

Provides the in-memory image cache and the per-consumer fetch coordinator.
"""

from .base import CacheEntry, CacheStats, DecodedImage, ImageState, LoadState
from .cache import ImageCache
from .coalescer import FetchCoalescer
from .coordinator import ImageFetchCoordinator
from .decoder import ImageDecoder, PillowDecoder
from .errors import (
    BadStatusError,
    DecodeError,
    ImageFetchError,
    InvalidKeyError,
    TransportError,
)
from .janitor import CacheJanitor

__all__ = [
    "BadStatusError",
    "CacheEntry",
    "CacheJanitor",
    "CacheStats",
    "DecodeError",
    "DecodedImage",
    "FetchCoalescer",
    "ImageCache",
    "ImageDecoder",
    "ImageFetchCoordinator",
    "ImageFetchError",
    "ImageState",
    "InvalidKeyError",
    "LoadState",
    "PillowDecoder",
    "TransportError",
]
