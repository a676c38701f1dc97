"""Request canonicalization, SigV4 signing and credential sources."""

from .canonical import CanonicalRequest, Phase, build_canonical_request
from .credentials import (
    Boto3CredentialSource,
    CredentialSource,
    StaticCredentialSource,
    default_credential_source,
)
from .sigv4 import (
    AuthorizationHeader,
    SignatureResult,
    SigV4Signer,
    parse_authorization,
)

__all__ = [
    "AuthorizationHeader",
    "Boto3CredentialSource",
    "CanonicalRequest",
    "CredentialSource",
    "Phase",
    "SignatureResult",
    "SigV4Signer",
    "StaticCredentialSource",
    "build_canonical_request",
    "default_credential_source",
    "parse_authorization",
]
