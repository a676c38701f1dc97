"""Per-operation option records for proof creation and verification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .config import CloudProofConfig, load_config
from .constants import DEFAULT_USER_AGENT
from .security.credentials import CredentialSource, default_credential_source
from .transports import BaseTransport, get_transport
from .utils.timestamps import as_utc


@dataclass
class ProofOptions:
    """Options for creating a proof.

    Unset fields fall back to boto3's default credential chain, the current
    UTC time, and :data:`~cloudproof.constants.DEFAULT_USER_AGENT`.
    """

    credential_source: Optional[CredentialSource] = None
    signing_time: Optional[datetime] = None
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if self.signing_time is not None:
            self.signing_time = as_utc(self.signing_time)

    @classmethod
    def from_config(cls, config: Optional[CloudProofConfig] = None) -> "ProofOptions":
        config = config or load_config()
        return cls(
            credential_source=default_credential_source(config.profile),
            user_agent=config.user_agent,
        )


@dataclass
class VerifyOptions:
    """Options for verifying a proof.

    Unset fields fall back to an :class:`~cloudproof.transports.HttpxTransport`,
    the default user agent, and the variant's public endpoint.
    """

    transport: Optional[BaseTransport] = None
    user_agent: str = DEFAULT_USER_AGENT
    endpoint_url: Optional[str] = None

    @classmethod
    def from_config(
        cls, variant_name: str, config: Optional[CloudProofConfig] = None
    ) -> "VerifyOptions":
        config = config or load_config()
        return cls(
            transport=get_transport(config=config),
            user_agent=config.user_agent,
            endpoint_url=config.endpoints.url_for(variant_name),
        )
