"""Sources of the ambient AWS credentials a claimant signs with."""

from __future__ import annotations

import logging
from typing import Optional, Protocol, runtime_checkable

import boto3

from ..contracts import Credentials
from ..errors import CredentialError

logger = logging.getLogger(__name__)


@runtime_checkable
class CredentialSource(Protocol):
    """Anything that can hand out credentials for signing."""

    def retrieve(self) -> Credentials:
        """Return credentials or raise :class:`CredentialError`."""


class StaticCredentialSource:
    """Always returns the same credentials. Mostly useful in tests."""

    def __init__(self, credentials: Credentials) -> None:
        self._credentials = credentials

    def retrieve(self) -> Credentials:
        return self._credentials


class Boto3CredentialSource:
    """Resolves credentials through boto3's default provider chain.

    This covers environment variables, shared config and credential files,
    SSO, container and instance metadata, the same way the AWS CLI does.
    """

    def __init__(self, profile_name: Optional[str] = None) -> None:
        self.profile_name = profile_name
        self._session: Optional[boto3.Session] = None

    def _get_session(self) -> boto3.Session:
        if self._session is None:
            self._session = boto3.Session(profile_name=self.profile_name)
        return self._session

    def retrieve(self) -> Credentials:
        try:
            credentials = self._get_session().get_credentials()
            frozen = credentials.get_frozen_credentials() if credentials else None
        except Exception as exc:
            raise CredentialError(f"failed to load AWS credentials: {exc}") from exc

        if frozen is None or not frozen.access_key or not frozen.secret_key:
            raise CredentialError("no AWS credentials available")
        logger.debug(f"Loaded AWS credentials for access key {frozen.access_key}")
        return Credentials(
            access_key_id=frozen.access_key,
            secret_access_key=frozen.secret_key,
            session_token=frozen.token,
        )


def default_credential_source(profile_name: Optional[str] = None) -> CredentialSource:
    """Return the credential source used when none is configured."""
    return Boto3CredentialSource(profile_name=profile_name)
