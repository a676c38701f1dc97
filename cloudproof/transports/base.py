"""Transport interface used by the verifier to reach the provider."""

from __future__ import annotations

import abc
from typing import Dict

from pydantic import BaseModel, Field

from ..security.canonical import CanonicalRequest


class HttpResponse(BaseModel):
    """Status, headers and raw body of a provider response."""

    status_code: int
    headers: Dict[str, str] = Field(default_factory=dict)
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class BaseTransport(metaclass=abc.ABCMeta):
    """Sends a prepared request and returns the provider's response.

    Implementations must send the request exactly as given: same method,
    URL, headers and body. Timeouts and cancellation belong to the
    implementation's own configuration.
    """

    @abc.abstractmethod
    def send(self, request: CanonicalRequest) -> HttpResponse:
        """Send ``request``; raise :class:`~cloudproof.errors.TransportError` on failure."""
        raise NotImplementedError

    def close(self) -> None:
        """Release any held resources (no-op by default)."""
        pass
