"""
Image decoding.

Turns raw response bytes into DecodedImage payloads.
"""

from abc import ABC, abstractmethod
from io import BytesIO

from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from ..logging import get_logger
from .base import DecodedImage
from .errors import DecodeError

logger = get_logger("decoder")


class ImageDecoder(ABC):
    """Abstract interface for image decoders."""

    @abstractmethod
    def decode(self, data: bytes, media_type: str | None = None, key: str = "") -> DecodedImage:
        """
        Decode raw bytes into an image.

        Args:
            data: Encoded image bytes
            media_type: Content type reported by the server, if any
            key: Resource identifier, used for error reporting

        Returns:
            Decoded image

        Raises:
            DecodeError: If the bytes are not a valid image
        """
        pass


class PillowDecoder(ImageDecoder):
    """Decodes images with Pillow, optionally downscaling large ones."""

    def __init__(self, max_dimension: int | None = None):
        """
        Initialize the decoder.

        Args:
            max_dimension: Maximum width or height in pixels (preserves aspect ratio).
                None keeps images at their original size.
        """
        if max_dimension is not None and max_dimension <= 0:
            raise ValueError("max_dimension must be positive")
        self.max_dimension = max_dimension

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PillowDecoder):
            return NotImplemented
        return self.max_dimension == other.max_dimension

    def __hash__(self) -> int:
        return hash((PillowDecoder, self.max_dimension))

    def decode(self, data: bytes, media_type: str | None = None, key: str = "") -> DecodedImage:
        if not data:
            raise DecodeError(key, "empty response body")

        try:
            img = PILImage.open(BytesIO(data))
            img.load()
        except (UnidentifiedImageError, PILImage.DecompressionBombError, OSError, ValueError) as e:
            raise DecodeError(key, str(e) or type(e).__name__) from e

        detected_type = PILImage.MIME.get(img.format or "")

        # Palette and exotic modes are expanded so consumers get drawable pixels
        if img.mode == "P":
            has_transparency = "transparency" in img.info
            img = img.convert("RGBA") if has_transparency else img.convert("RGB")
        elif img.mode not in ("RGB", "RGBA", "L", "LA"):
            img = img.convert("RGB")

        width, height = img.size
        if self.max_dimension and (width > self.max_dimension or height > self.max_dimension):
            ratio = min(self.max_dimension / width, self.max_dimension / height)
            new_width = max(1, int(width * ratio))
            new_height = max(1, int(height * ratio))
            img = img.resize((new_width, new_height), PILImage.Resampling.LANCZOS)
            logger.debug(
                "Downscaled image {}: {}x{} -> {}x{}", key, width, height, new_width, new_height
            )

        return DecodedImage.from_pil(img, media_type=detected_type or media_type)
