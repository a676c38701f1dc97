"""Production transport backed by an ``httpx.Client``."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..errors import TransportError
from ..security.canonical import CanonicalRequest
from .base import BaseTransport, HttpResponse

logger = logging.getLogger(__name__)


class HttpxTransport(BaseTransport):
    """Sends requests with httpx.

    A caller-supplied client is used as-is (its timeouts, proxies and mounted
    transports included) and is not closed by :meth:`close`.
    """

    def __init__(self, client: Optional[httpx.Client] = None, timeout: float = 10.0) -> None:
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def send(self, request: CanonicalRequest) -> HttpResponse:
        http_request = self._client.build_request(
            request.method,
            request.url,
            headers=request.headers,
            content=request.body,
        )
        # Never part of the signable surface.
        if "transfer-encoding" in http_request.headers:
            del http_request.headers["transfer-encoding"]

        logger.debug("Sending %s %s", request.method, request.url)
        try:
            response = self._client.send(http_request)
        except httpx.HTTPError as exc:
            raise TransportError(f"request to {request.url} failed: {exc}") from exc

        return HttpResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
