"""Descriptors for the provider API calls a proof can be built over."""

from __future__ import annotations

from typing import Any, Callable, Dict
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

from .constants import DEFAULT_REGION
from .decoding import decode_identity, decode_organization


class APIVariant(BaseModel):
    """Everything that distinguishes one proof pipeline from another.

    Both the claimant and the verifier build their request from the same
    descriptor, which keeps the signed request and the replayed request in
    step.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    host: str
    signing_service: str
    region: str = DEFAULT_REGION
    method: str = "POST"
    path: str = "/"
    signed_body: bytes = b""
    unsigned_headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Headers sent on every request but left out of the signature",
    )
    replay_headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Headers attached only when the verifier replays the request",
    )
    expected_response_shape: Callable[[bytes], Any] = Field(..., exclude=True)

    @property
    def endpoint_url(self) -> str:
        return f"https://{self.host}{self.path}"

    def decode(self, body: bytes) -> Any:
        """Decode a successful provider response for this variant."""
        return self.expected_response_shape(body)


IDENTITY = APIVariant(
    name="identity",
    host="sts.amazonaws.com",
    signing_service="sts",
    signed_body=urlencode(
        [("Action", "GetCallerIdentity"), ("Version", "2011-06-15")]
    ).encode("ascii"),
    unsigned_headers={
        "Accept-Encoding": "identity",
        "Content-Type": "application/x-www-form-urlencoded",
    },
    expected_response_shape=decode_identity,
)

# Content-Type is only set on replay. The original signer never saw it and
# the provider accepts the replay as long as it stays out of SignedHeaders.
ORGANIZATION = APIVariant(
    name="organization",
    host="organizations.us-east-1.amazonaws.com",
    signing_service="organizations",
    unsigned_headers={
        "X-Amz-Target": "AWSOrganizationsV20161128.DescribeOrganization",
    },
    replay_headers={"Content-Type": "application/x-amz-json-1.1"},
    expected_response_shape=decode_organization,
)

VARIANTS: Dict[str, APIVariant] = {
    IDENTITY.name: IDENTITY,
    ORGANIZATION.name: ORGANIZATION,
}


def get_variant(name: str) -> APIVariant:
    """Look up a variant by name (``identity`` or ``organization``)."""
    try:
        return VARIANTS[name.lower()]
    except KeyError:
        raise ValueError(f"Unsupported API variant: {name}") from None
