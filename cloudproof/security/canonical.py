"""Construction of the exact HTTP request that is signed and later replayed."""

from __future__ import annotations

import hashlib
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Mapping, Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import AMZ_DATE_HEADER, DEFAULT_USER_AGENT
from ..utils.timestamps import as_utc, format_amz_date
from ..variants import APIVariant


class Phase(str, Enum):
    """Which side of the protocol a request is built for."""

    SIGN = "sign"
    REPLAY = "replay"


def _without_transfer_encoding(headers: Mapping[str, str]) -> Dict[str, str]:
    return {k: v for k, v in headers.items() if k.lower() != "transfer-encoding"}


class CanonicalRequest(BaseModel):
    """An HTTP request in the form both sides must agree on byte-for-byte.

    ``host``, ``path`` and ``query`` are what gets signed; ``url`` is where
    the request is actually sent, which differs only when the verifier points
    at a non-default endpoint. ``unsigned_headers`` lists lower-cased header
    names that travel with the request but are kept out of the signature.
    """

    model_config = ConfigDict(frozen=True)

    method: str
    url: str
    host: str
    path: str = "/"
    query: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)
    unsigned_headers: FrozenSet[str] = frozenset()
    body: bytes = b""
    timestamp: Optional[datetime] = None

    @field_validator("headers")
    @classmethod
    def _strip_transfer_encoding(cls, value: Dict[str, str]) -> Dict[str, str]:
        return _without_transfer_encoding(value)

    @field_validator("unsigned_headers", mode="before")
    @classmethod
    def _lower_names(cls, value):
        return frozenset(name.lower() for name in value)

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value is not None else None

    @property
    def payload_hash(self) -> str:
        """Hex SHA-256 of the body."""
        return hashlib.sha256(self.body).hexdigest()

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    def with_headers(self, extra: Mapping[str, str]) -> "CanonicalRequest":
        """Return a copy with ``extra`` set, replacing headers of the same name."""
        replaced = {name.lower() for name in extra}
        headers = {k: v for k, v in self.headers.items() if k.lower() not in replaced}
        headers.update(extra)
        return self.model_copy(update={"headers": _without_transfer_encoding(headers)})


def build_canonical_request(
    variant: APIVariant,
    *,
    phase: Phase = Phase.SIGN,
    timestamp: Optional[datetime] = None,
    user_agent: str = DEFAULT_USER_AGENT,
    endpoint_url: Optional[str] = None,
) -> CanonicalRequest:
    """Build the request for ``variant`` deterministically.

    Args:
        variant: The API call to build.
        phase: ``Phase.REPLAY`` adds the variant's replay-only headers.
        timestamp: When given, sets ``X-Amz-Date`` from it.
        user_agent: Value of the ``User-Agent`` header. Never signed.
        endpoint_url: Where the request is sent. Defaults to the variant's
            public endpoint; the signed host and path are unaffected.
    """
    url = endpoint_url or variant.endpoint_url
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"Invalid endpoint URL: {url}")

    body = variant.signed_body
    headers: Dict[str, str] = {"User-Agent": user_agent}
    if body:
        headers["Content-Length"] = str(len(body))
    headers.update(variant.unsigned_headers)
    if phase is Phase.REPLAY:
        headers.update(variant.replay_headers)
    if timestamp is not None:
        headers[AMZ_DATE_HEADER] = format_amz_date(timestamp)

    return CanonicalRequest(
        method=variant.method,
        url=url,
        host=variant.host,
        path=variant.path,
        headers=headers,
        unsigned_headers=set(variant.unsigned_headers) | set(variant.replay_headers),
        body=body,
        timestamp=timestamp,
    )
