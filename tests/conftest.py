"""Shared fixtures: stub credentials and a stub AWS provider."""

from datetime import datetime, timezone
from typing import Callable

import pytest

from cloudproof.constants import AMZ_DATE_FORMAT
from cloudproof.contracts import Credentials
from cloudproof.errors import SigningError
from cloudproof.security.canonical import CanonicalRequest
from cloudproof.security.credentials import StaticCredentialSource
from cloudproof.security.sigv4 import SigV4Signer, parse_authorization
from cloudproof.transports import HttpResponse, InMemoryTransport

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

IDENTITY_XML = """
<GetCallerIdentityResponse xmlns="https://sts.amazonaws.com/doc/2011-06-15/">
  <GetCallerIdentityResult>
    <Arn>arn:aws:sts::123456789012:assumed-role/test-role/test-session</Arn>
    <UserId>ABCDEFG12345:user-name</UserId>
    <Account>123456789012</Account>
  </GetCallerIdentityResult>
  <ResponseMetadata>
    <RequestId>00000</RequestId>
  </ResponseMetadata>
</GetCallerIdentityResponse>
"""

ORGANIZATION_JSON = """
{
  "Organization": {
    "Arn": "arn:aws:organizations::111111111111:organization/o-exampleorgid",
    "AvailablePolicyTypes": [
      {"Status": "ENABLED", "Type": "SERVICE_CONTROL_POLICY"}
    ],
    "FeatureSet": "ALL",
    "Id": "o-exampleorgid",
    "MasterAccountArn": "arn:aws:organizations::111111111111:account/o-exampleorgid/111111111111",
    "MasterAccountEmail": "bill@example.com",
    "MasterAccountId": "111111111111"
  }
}
"""


class StubProvider:
    """Accepts a request only if its SigV4 signature checks out.

    Re-signs the incoming request with the known credentials at the time in
    its X-Amz-Date header, the way AWS validates a signature. The session
    token on the request must be the one issued with those credentials.
    """

    def __init__(self, credentials: Credentials, body: str) -> None:
        self.credentials = credentials
        self.body = body.encode("utf-8")

    @staticmethod
    def _reject(message: str) -> HttpResponse:
        return HttpResponse(status_code=403, body=message.encode("utf-8"))

    def __call__(self, request: CanonicalRequest) -> HttpResponse:
        authorization = request.header("Authorization") or ""
        token = request.header("X-Amz-Security-Token")
        if token != self.credentials.session_token:
            return self._reject("InvalidClientTokenId")
        try:
            claim = parse_authorization(authorization)
            signing_time = datetime.strptime(
                request.header("X-Amz-Date") or "", AMZ_DATE_FORMAT
            ).replace(tzinfo=timezone.utc)
            expected = SigV4Signer(claim.service, claim.region).sign(
                request, self.credentials, signing_time
            )
        except (ValueError, SigningError):
            return self._reject("IncompleteSignature")
        if expected.authorization != authorization:
            return self._reject("SignatureDoesNotMatch")
        return HttpResponse(status_code=200, body=self.body)


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        access_key_id="AKID", secret_access_key="SECRET", session_token="SESSION"
    )


@pytest.fixture
def credential_source(credentials) -> StaticCredentialSource:
    return StaticCredentialSource(credentials)


@pytest.fixture
def epoch() -> datetime:
    return EPOCH


@pytest.fixture
def identity_xml() -> str:
    return IDENTITY_XML


@pytest.fixture
def organization_json() -> str:
    return ORGANIZATION_JSON


@pytest.fixture
def stub_provider(credentials) -> Callable[[str], InMemoryTransport]:
    def _make(body: str) -> InMemoryTransport:
        return InMemoryTransport(handler=StubProvider(credentials, body))

    return _make


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("CLOUDPROOF_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.delenv("CLOUDPROOF_TRANSPORT", raising=False)
    monkeypatch.delenv("CLOUDPROOF_USER_AGENT", raising=False)
    monkeypatch.delenv("AWS_PROFILE", raising=False)
