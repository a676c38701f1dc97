"""Exceptions raised while creating or verifying proofs."""

from __future__ import annotations


class CloudProofError(Exception):
    """Base class for all cloudproof failures."""


class SigningError(CloudProofError):
    """The request could not be signed.

    Usually indicates a malformed canonical request, which is a programming
    defect rather than a transient condition.
    """


class CredentialError(SigningError):
    """The credential source could not supply credentials."""


class TransportError(CloudProofError):
    """The replayed request could not be delivered to the provider."""


class VerificationError(CloudProofError):
    """The provider rejected the replayed request."""

    def __init__(self, status_code: int, body: bytes | str) -> None:
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        self.status_code = status_code
        self.body = body
        super().__init__(f"provider rejected proof with status {status_code}: {body}")


class DecodeError(CloudProofError):
    """The provider response did not have the expected shape."""
