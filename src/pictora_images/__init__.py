"""
Pictora Images.

Network image layer for the Pictora AI art client: a bounded in-memory
image cache and per-consumer fetch coordinators.

Usage:
    # Load images from the command line
    pictora-images fetch https://example.com/art.png

    # Show configuration
    pictora-images info
"""

__version__ = "0.1.0"

from .images import ImageCache, ImageFetchCoordinator, ImageState, LoadState
from .transport import create_transport

__all__ = [
    "ImageCache",
    "ImageFetchCoordinator",
    "ImageState",
    "LoadState",
    "create_transport",
]
