"""Proof creation on the claimant side."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from .contracts import Credentials, ProofArtifact
from .errors import CloudProofError, CredentialError
from .options import ProofOptions
from .security.canonical import Phase, build_canonical_request
from .security.credentials import CredentialSource, default_credential_source
from .security.sigv4 import SigV4Signer
from .variants import IDENTITY, ORGANIZATION, APIVariant

logger = logging.getLogger(__name__)


def _retrieve_credentials(source: CredentialSource) -> Credentials:
    try:
        return source.retrieve()
    except CloudProofError:
        raise
    except Exception as exc:
        raise CredentialError(f"credential source failed: {exc}") from exc


def create_proof(variant: APIVariant, options: Optional[ProofOptions] = None) -> ProofArtifact:
    """Sign ``variant``'s API call and package the result as a proof.

    The signature covers the request exactly as the verifier will rebuild
    it, so the artifact alone is enough to replay the call.

    Args:
        variant: The API call to sign over.
        options: Credential source, signing time and user agent. Defaults
            apply to any field left unset.

    Raises:
        CredentialError: If no credentials could be retrieved.
        SigningError: If the request could not be signed.
    """
    options = options or ProofOptions()
    signing_time: datetime = options.signing_time or datetime.now(timezone.utc)
    source = options.credential_source or default_credential_source()

    credentials = _retrieve_credentials(source)
    request = build_canonical_request(
        variant,
        phase=Phase.SIGN,
        timestamp=signing_time,
        user_agent=options.user_agent,
    )
    result = SigV4Signer(variant.signing_service, variant.region).sign(
        request, credentials, signing_time
    )

    logger.info(
        f"Created {variant.name} proof for access key {credentials.access_key_id} "
        f"with scope {result.credential_scope}"
    )
    return ProofArtifact(
        signature=result.authorization,
        timestamp=signing_time,
        session_token=credentials.session_token or "",
    )


def new_identity_proof(options: Optional[ProofOptions] = None) -> ProofArtifact:
    """Create a proof over STS ``GetCallerIdentity``."""
    return create_proof(IDENTITY, options)


def new_organization_proof(options: Optional[ProofOptions] = None) -> ProofArtifact:
    """Create a proof over Organizations ``DescribeOrganization``."""
    return create_proof(ORGANIZATION, options)
