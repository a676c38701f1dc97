"""Transport factory and initialization."""

from __future__ import annotations

import os
from typing import Optional

from ..config import CloudProofConfig, load_config
from .base import BaseTransport, HttpResponse
from .httpx import HttpxTransport
from .inmemory import InMemoryTransport

# InMemoryTransport has no provider behind it, so it is built directly in
# tests and never chosen by name.
_BACKENDS = ("httpx",)


def get_transport(
    backend: Optional[str] = None, config: Optional[CloudProofConfig] = None
) -> BaseTransport:
    """Factory function to get the configured transport.

    Raises:
        ValueError: If the backend is not one of the networked backends.
    """

    config = config or load_config()
    backend = (
        backend
        or os.getenv("CLOUDPROOF_TRANSPORT")
        or config.transport.backend
    ).lower()

    if backend == "httpx":
        return HttpxTransport(timeout=config.transport.timeout)
    else:
        raise ValueError(
            f"Unsupported transport backend: {backend} (expected one of {', '.join(_BACKENDS)})"
        )


__all__ = [
    "BaseTransport",
    "HttpResponse",
    "HttpxTransport",
    "InMemoryTransport",
    "get_transport",
]
