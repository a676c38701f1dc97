"""Proof verification on the verifier side.

The verifier never checks a signature itself. It rebuilds the signed
request from the artifact and lets the provider decide: if the provider
accepts the request, its answer about who signed it is trusted.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .constants import AUTHORIZATION_HEADER, SECURITY_TOKEN_HEADER
from .contracts import Identity, Organization, ProofArtifact
from .errors import VerificationError
from .options import VerifyOptions
from .security.canonical import CanonicalRequest, Phase, build_canonical_request
from .security.sigv4 import parse_authorization
from .transports import BaseTransport, HttpxTransport
from .variants import IDENTITY, ORGANIZATION, APIVariant

logger = logging.getLogger(__name__)


class ProofVerifier:
    """Replays proofs for one API variant against the provider."""

    def __init__(self, variant: APIVariant, options: Optional[VerifyOptions] = None) -> None:
        self.variant = variant
        self.options = options or VerifyOptions()

    def build_replay_request(self, artifact: ProofArtifact) -> CanonicalRequest:
        """Rebuild the signed request from ``artifact``, ready to send."""
        request = build_canonical_request(
            self.variant,
            phase=Phase.REPLAY,
            timestamp=artifact.timestamp,
            user_agent=self.options.user_agent,
            endpoint_url=self.options.endpoint_url,
        )
        headers = {}
        if artifact.session_token:
            headers[SECURITY_TOKEN_HEADER] = artifact.session_token
        headers[AUTHORIZATION_HEADER] = artifact.signature
        return request.with_headers(headers)

    def verify(self, artifact: ProofArtifact) -> Any:
        """Replay ``artifact`` and return the decoded provider answer.

        Raises:
            TransportError: If the provider could not be reached.
            VerificationError: If the provider rejected the request.
            DecodeError: If the provider's answer had an unexpected shape.
        """
        request = self.build_replay_request(artifact)
        self._log_claim(artifact)

        transport: BaseTransport = self.options.transport or HttpxTransport()
        try:
            response = transport.send(request)
        finally:
            if self.options.transport is None:
                transport.close()

        if not response.ok:
            logger.warning(
                f"Provider rejected {self.variant.name} proof with status "
                f"{response.status_code}"
            )
            raise VerificationError(response.status_code, response.body)

        return self.variant.decode(response.body)

    def _log_claim(self, artifact: ProofArtifact) -> None:
        try:
            claim = parse_authorization(artifact.signature)
        except ValueError:
            logger.warning(
                f"{self.variant.name} proof signature is not a SigV4 header; "
                "replaying it unchanged"
            )
            return
        logger.debug(
            f"Replaying {self.variant.name} proof for access key "
            f"{claim.access_key_id} with scope {claim.credential_scope}"
        )


def verify_identity_proof(
    artifact: ProofArtifact, options: Optional[VerifyOptions] = None
) -> Identity:
    """Verify a proof created by :func:`~cloudproof.proof.new_identity_proof`."""
    return ProofVerifier(IDENTITY, options).verify(artifact)


def verify_organization_proof(
    artifact: ProofArtifact, options: Optional[VerifyOptions] = None
) -> Organization:
    """Verify a proof created by :func:`~cloudproof.proof.new_organization_proof`."""
    return ProofVerifier(ORGANIZATION, options).verify(artifact)
