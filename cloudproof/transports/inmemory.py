"""In-memory stand-in for the provider, for tests."""

from __future__ import annotations

import threading
from collections import deque
from typing import Callable, Deque, Dict, Iterable, List, Optional

from ..errors import TransportError
from ..security.canonical import CanonicalRequest
from .base import BaseTransport, HttpResponse

Handler = Callable[[CanonicalRequest], HttpResponse]


class InMemoryTransport(BaseTransport):
    """Answers from a handler or from a queue of canned responses.

    Every request received is kept in :attr:`requests` so tests can inspect
    exactly what would have gone over the wire.
    """

    def __init__(
        self,
        handler: Optional[Handler] = None,
        responses: Optional[Iterable[HttpResponse]] = None,
    ) -> None:
        self._handler = handler
        self._responses: Deque[HttpResponse] = deque(responses or [])
        self._lock = threading.Lock()
        self.requests: List[CanonicalRequest] = []

    @classmethod
    def returning(
        cls,
        status_code: int,
        body: bytes | str,
        headers: Optional[Dict[str, str]] = None,
    ) -> "InMemoryTransport":
        """Build a transport that answers every request the same way."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        response = HttpResponse(status_code=status_code, headers=headers or {}, body=body)
        return cls(handler=lambda _request: response)

    def send(self, request: CanonicalRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)
            if self._handler is None:
                if not self._responses:
                    raise TransportError("in-memory transport has no response queued")
                return self._responses.popleft()
        return self._handler(request)
