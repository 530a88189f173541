"""
Data models for image caching.

Provides Pydantic models for decoded images, cache entries, cache statistics
and the load state published to consumers.
"""

from enum import Enum

from PIL import Image as PILImage
from pydantic import BaseModel, ConfigDict, Field

from .errors import ImageFetchError


class DecodedImage(BaseModel):
    """A decoded image held in memory."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    image: PILImage.Image = Field(description="Decoded Pillow image")
    width: int = Field(description="Image width in pixels")
    height: int = Field(description="Image height in pixels")
    media_type: str | None = Field(default=None, description="MIME type (e.g., 'image/png')")

    @classmethod
    def from_pil(cls, image: PILImage.Image, media_type: str | None = None) -> "DecodedImage":
        """Wrap a Pillow image, taking dimensions from the image itself."""
        width, height = image.size
        return cls(image=image, width=width, height=height, media_type=media_type)

    @property
    def is_valid(self) -> bool:
        """Return True if the image has a drawable area."""
        return self.width > 0 and self.height > 0

    @property
    def cost(self) -> int:
        """Estimated in-memory size of the decoded pixels in bytes."""
        bands = len(self.image.getbands()) or 1
        return self.width * self.height * bands


class CacheEntry(BaseModel):
    """A cached image with last-access bookkeeping."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    key: str = Field(description="Resource identifier, usually the image URL")
    payload: DecodedImage
    last_accessed: float = Field(description="Clock reading of the last get or put")
    cost: int = Field(description="Estimated byte cost counted against the budget")

    def touch(self, now: float) -> None:
        """Record an access without ever moving the timestamp backwards."""
        self.last_accessed = max(self.last_accessed, now)


class CacheStats(BaseModel):
    """Cache statistics."""

    size: int = 0
    max_entries: int = 0
    total_cost: int = 0
    max_cost: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate (0.0 to 1.0)."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class LoadState(str, Enum):
    """Lifecycle of a coordinator's image."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class ImageState(BaseModel):
    """State published to a consumer after every transition."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    status: LoadState = LoadState.IDLE
    key: str | None = None
    image: DecodedImage | None = None
    error: ImageFetchError | None = None

    @classmethod
    def idle(cls, key: str | None = None) -> "ImageState":
        return cls(status=LoadState.IDLE, key=key)

    @classmethod
    def loading(cls, key: str) -> "ImageState":
        return cls(status=LoadState.LOADING, key=key)

    @classmethod
    def loaded(cls, key: str, image: DecodedImage) -> "ImageState":
        return cls(status=LoadState.LOADED, key=key, image=image)

    @classmethod
    def failed(cls, key: str, error: ImageFetchError) -> "ImageState":
        return cls(status=LoadState.FAILED, key=key, error=error)
