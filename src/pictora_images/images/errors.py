"""
Errors reported by the image fetch layer.

Every failure a consumer can observe is an ImageFetchError subclass. The
cache itself never raises: a miss is a normal outcome.
"""


class ImageFetchError(Exception):
    """Base class for failures while resolving an image for a key."""

    def __init__(self, key: str, message: str):
        super().__init__(message)
        self.key = key
        self.message = message

    def __str__(self) -> str:
        return f"{self.message} ({self.key})"


class InvalidKeyError(ImageFetchError):
    """The key cannot be interpreted as a fetchable URL."""

    def __init__(self, key: str, reason: str = "not an absolute http(s) URL"):
        super().__init__(key, f"Invalid image URL: {reason}")
        self.reason = reason


class TransportError(ImageFetchError):
    """Network-level failure (timeout, connection refused, DNS failure)."""

    def __init__(self, key: str, cause: BaseException):
        super().__init__(key, f"Network error: {str(cause) or type(cause).__name__}")
        self.cause = cause


class BadStatusError(ImageFetchError):
    """HTTP response status outside 200-299."""

    def __init__(self, key: str, status_code: int):
        super().__init__(key, f"Unexpected HTTP status {status_code}")
        self.status_code = status_code


class DecodeError(ImageFetchError):
    """Response body is not a valid image payload."""

    def __init__(self, key: str, reason: str):
        super().__init__(key, f"Could not decode image: {reason}")
        self.reason = reason
