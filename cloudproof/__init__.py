"""cloudproof: prove an AWS identity by handing over a signed API call."""

from .contracts import AvailablePolicyType, Credentials, Identity, Organization, ProofArtifact
from .errors import (
    CloudProofError,
    CredentialError,
    DecodeError,
    SigningError,
    TransportError,
    VerificationError,
)
from .options import ProofOptions, VerifyOptions
from .proof import create_proof, new_identity_proof, new_organization_proof
from .transports import get_transport
from .variants import IDENTITY, ORGANIZATION, APIVariant, get_variant
from .verify import ProofVerifier, verify_identity_proof, verify_organization_proof

__version__ = "0.1.0"
__all__ = [
    "APIVariant",
    "AvailablePolicyType",
    "CloudProofError",
    "CredentialError",
    "Credentials",
    "DecodeError",
    "IDENTITY",
    "Identity",
    "ORGANIZATION",
    "Organization",
    "ProofArtifact",
    "ProofOptions",
    "ProofVerifier",
    "SigningError",
    "TransportError",
    "VerificationError",
    "VerifyOptions",
    "create_proof",
    "get_transport",
    "get_variant",
    "new_identity_proof",
    "new_organization_proof",
    "verify_identity_proof",
    "verify_organization_proof",
]
