from __future__ import annotations

import os
from typing import Literal, Optional

import yaml
from pydantic import BaseModel

from .constants import DEFAULT_USER_AGENT


class TransportConfig(BaseModel):
    """Transport configuration settings."""

    backend: Literal["httpx"] = "httpx"
    timeout: float = 10.0


class EndpointConfig(BaseModel):
    """Verification endpoint overrides, per API variant."""

    identity_url: Optional[str] = None
    organization_url: Optional[str] = None

    def url_for(self, variant_name: str) -> Optional[str]:
        return getattr(self, f"{variant_name}_url", None)


class CloudProofConfig(BaseModel):
    """Top-level configuration model."""

    user_agent: str = DEFAULT_USER_AGENT
    profile: Optional[str] = None
    transport: TransportConfig = TransportConfig()
    endpoints: EndpointConfig = EndpointConfig()


def load_config(path: Optional[str] = None) -> CloudProofConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to CLOUDPROOF_CONFIG env
            variable or 'cloudproof.yaml' in the current directory.
    """

    config_path = path or os.getenv("CLOUDPROOF_CONFIG", "cloudproof.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = CloudProofConfig(**data)
    else:
        config = CloudProofConfig()

    env_user_agent = os.getenv("CLOUDPROOF_USER_AGENT")
    if env_user_agent:
        config.user_agent = env_user_agent
    env_profile = os.getenv("AWS_PROFILE")
    if env_profile and not config.profile:
        config.profile = env_profile
    return config
