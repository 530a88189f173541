"""Fetch transport package.

Provides a factory function to create the configured fetch transport.
"""

from .base import FetchResponse, FetchTransport, validate_url
from .http import HttpxTransport


def create_transport(
    transport_type: str = "httpx",
    timeout: float = 30,
) -> FetchTransport:
    """Create a fetch transport instance.

    Args:
        transport_type: Type of transport (currently only "httpx")
        timeout: HTTP request timeout in seconds

    Returns:
        Configured FetchTransport instance

    Raises:
        ValueError: If transport_type is not recognized

    """
    if transport_type == "httpx":
        return HttpxTransport(timeout=timeout)
    else:
        raise ValueError(f"Unknown fetch transport: {transport_type}")


__all__ = [
    "FetchResponse",
    "FetchTransport",
    "HttpxTransport",
    "create_transport",
    "validate_url",
]
