"""Pytest fixtures and configuration for pictora-images tests.

This module provides shared fixtures for testing the image cache, the fetch
coordinator, transports and the CLI.
"""

import asyncio
from io import BytesIO

import pytest
from PIL import Image

from pictora_images.images.base import DecodedImage
from pictora_images.images.cache import ImageCache
from pictora_images.transport.base import FetchResponse, FetchTransport

# --- Clock ---


class FakeClock:
    """Manually advanced clock for last-access bookkeeping."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock starting at t=1000."""
    return FakeClock()


# --- Sample Data Fixtures ---


def encode_image(
    size: tuple[int, int] = (100, 100),
    mode: str = "RGB",
    color="red",
    fmt: str = "JPEG",
) -> bytes:
    """Encode a solid-colour image to bytes."""
    img = Image.new(mode, size, color=color)
    buffer = BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


def make_image(width: int = 10, height: int = 10, mode: str = "RGB") -> DecodedImage:
    """Create a decoded image of the given size."""
    return DecodedImage.from_pil(Image.new(mode, (width, height)), media_type="image/png")


@pytest.fixture
def sample_image_bytes() -> bytes:
    """Create sample JPEG bytes for testing."""
    # A simple 100x100 red image
    return encode_image()


@pytest.fixture
def sample_png_bytes() -> bytes:
    """Create sample PNG bytes with transparency."""
    return encode_image(size=(40, 20), mode="RGBA", color=(255, 0, 0, 128), fmt="PNG")


@pytest.fixture
def image_factory():
    """Expose make_image to tests."""
    return make_image


# --- Cache Fixtures ---


@pytest.fixture
def image_cache(clock) -> ImageCache:
    """Create a small ImageCache driven by the fake clock."""
    return ImageCache(max_entries=3, max_cost=10_000, clock=clock)


# --- Transport Fixtures ---


class FakeTransport(FetchTransport):
    """In-memory transport with optional per-URL gates.

    Responses are served from ``routes``; a route may also be an exception
    instance, which is raised. URLs listed in ``gates`` block until their
    event is set, so tests can interleave requests deterministically.
    """

    def __init__(self, routes: dict | None = None):
        self.routes: dict[str, FetchResponse | Exception] = routes or {}
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[str] = []
        self.closed = False

    def gate(self, url: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[url] = event
        return event

    async def fetch(self, url: str) -> FetchResponse:
        self.calls.append(url)
        if url in self.gates:
            await self.gates[url].wait()
        route = self.routes.get(url, FetchResponse(status_code=404))
        if isinstance(route, Exception):
            raise route
        return route

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fake_transport(sample_image_bytes, sample_png_bytes) -> FakeTransport:
    """Create a fake transport serving two images."""
    return FakeTransport(
        {
            "https://cdn.example.com/a.jpg": FetchResponse(
                status_code=200, content=sample_image_bytes, media_type="image/jpeg"
            ),
            "https://cdn.example.com/b.png": FetchResponse(
                status_code=200, content=sample_png_bytes, media_type="image/png"
            ),
        }
    )


# --- Settings Override Fixtures ---


@pytest.fixture
def mock_settings(monkeypatch):
    """Override settings with test values."""
    monkeypatch.setenv("CACHE_MAX_ENTRIES", "5")
    monkeypatch.setenv("FETCH_TIMEOUT", "3")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    from pictora_images.config import Settings

    return Settings()
