"""AWS Signature Version 4 signing.

The signature itself comes from botocore's ``SigV4Auth``. This module feeds
it an ``AWSRequest`` holding only the headers that belong in the signature,
and pins the signing time instead of letting botocore read the clock, so
signing is a pure function of the request, the credentials and the time.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import List

from botocore.auth import SIGNED_HEADERS_BLACKLIST, SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials as BotoCredentials
from pydantic import BaseModel, ConfigDict

from ..constants import (
    AMZ_DATE_HEADER,
    AUTHORIZATION_HEADER,
    DEFAULT_REGION,
    SECURITY_TOKEN_HEADER,
    SIGV4_ALGORITHM,
    SIGV4_TERMINATOR,
)
from ..contracts import Credentials
from ..errors import SigningError
from ..utils.timestamps import format_amz_date
from .canonical import CanonicalRequest

logger = logging.getLogger(__name__)

# botocore never signs these; Authorization is dropped before signing.
IGNORED_HEADERS = frozenset(
    [AUTHORIZATION_HEADER.lower(), *(name.lower() for name in SIGNED_HEADERS_BLACKLIST)]
)

_AUTHORIZATION_RE = re.compile(
    r"^" + re.escape(SIGV4_ALGORITHM) + r" "
    r"Credential=(?P<access_key_id>[^/,\s]+)/(?P<date>\d{8})/(?P<region>[^/,\s]+)"
    r"/(?P<service>[^/,\s]+)/" + SIGV4_TERMINATOR + r",\s*"
    r"SignedHeaders=(?P<signed_headers>[a-z0-9\-;]+),\s*"
    r"Signature=(?P<signature>[0-9a-f]{64})$"
)


class SignatureResult(BaseModel):
    """Output of :meth:`SigV4Signer.sign` along with its intermediate values."""

    model_config = ConfigDict(frozen=True)

    authorization: str
    amz_date: str
    credential_scope: str
    signed_headers: str
    signature: str
    canonical_request: str
    string_to_sign: str


class AuthorizationHeader(BaseModel):
    """The parts of a SigV4 ``Authorization`` header value."""

    model_config = ConfigDict(frozen=True)

    access_key_id: str
    date: str
    region: str
    service: str
    signed_headers: List[str]
    signature: str

    @property
    def credential_scope(self) -> str:
        return f"{self.date}/{self.region}/{self.service}/{SIGV4_TERMINATOR}"


def parse_authorization(value: str) -> AuthorizationHeader:
    """Split a SigV4 ``Authorization`` value into its components.

    Raises:
        ValueError: If ``value`` is not a well-formed SigV4 header value.
    """
    match = _AUTHORIZATION_RE.match(value.strip())
    if match is None:
        raise ValueError("not a SigV4 Authorization header value")
    return AuthorizationHeader(
        access_key_id=match["access_key_id"],
        date=match["date"],
        region=match["region"],
        service=match["service"],
        signed_headers=match["signed_headers"].split(";"),
        signature=match["signature"],
    )


class SigV4Signer:
    """Signs canonical requests for one service and region."""

    def __init__(self, service: str, region: str = DEFAULT_REGION) -> None:
        self.service = service
        self.region = region

    def to_aws_request(
        self,
        request: CanonicalRequest,
        credentials: Credentials,
        signing_time: datetime,
    ) -> AWSRequest:
        """Build the botocore request that gets signed for ``request``.

        The URL is built from the signed ``host`` and ``path``, not from where
        the request is sent. Headers the request marks unsigned are left out,
        while ``X-Amz-Date`` and, when the credentials carry one,
        ``X-Amz-Security-Token`` are set from the signing inputs.

        Raises:
            SigningError: If the request is malformed or its ``X-Amz-Date`` or
                ``X-Amz-Security-Token`` disagree with the signing inputs.
        """
        if not request.method:
            raise SigningError("canonical request has no HTTP method")

        amz_date = format_amz_date(signing_time)
        present_date = request.header(AMZ_DATE_HEADER)
        if present_date is not None and present_date != amz_date:
            raise SigningError(
                f"request carries {AMZ_DATE_HEADER} {present_date} "
                f"but is being signed for {amz_date}"
            )
        present_token = request.header(SECURITY_TOKEN_HEADER)
        if present_token is not None and present_token != (credentials.session_token or ""):
            raise SigningError(
                f"request carries an {SECURITY_TOKEN_HEADER} that does not "
                "match the signing credentials"
            )

        headers = {}
        for name, value in request.headers.items():
            lower = name.lower()
            if lower in IGNORED_HEADERS or lower in request.unsigned_headers:
                continue
            if lower in (AMZ_DATE_HEADER.lower(), SECURITY_TOKEN_HEADER.lower()):
                continue
            if "\n" in value or "\r" in value:
                raise SigningError(f"header {name} contains a line break")
            headers[name] = value
        headers[AMZ_DATE_HEADER] = amz_date
        if credentials.session_token:
            if "\n" in credentials.session_token or "\r" in credentials.session_token:
                raise SigningError(f"{SECURITY_TOKEN_HEADER} contains a line break")
            headers[SECURITY_TOKEN_HEADER] = credentials.session_token

        url = f"https://{request.host}{request.path or '/'}"
        if request.query:
            url = f"{url}?{request.query}"
        aws_request = AWSRequest(
            method=request.method.upper(), url=url, data=request.body, headers=headers
        )
        aws_request.context["timestamp"] = amz_date
        return aws_request

    def sign(
        self,
        request: CanonicalRequest,
        credentials: Credentials,
        signing_time: datetime,
    ) -> SignatureResult:
        """Sign ``request`` and return the ``Authorization`` value.

        Raises:
            SigningError: If the request is malformed or cannot be encoded.
        """
        aws_request = self.to_aws_request(request, credentials, signing_time)
        auth = SigV4Auth(
            BotoCredentials(
                credentials.access_key_id,
                credentials.secret_access_key,
                credentials.session_token,
            ),
            self.service,
            self.region,
        )
        try:
            canonical_request = auth.canonical_request(aws_request)
            string_to_sign = auth.string_to_sign(aws_request, canonical_request)
            signature = auth.signature(string_to_sign, aws_request)
        except UnicodeError as exc:
            raise SigningError(f"canonical request cannot be encoded: {exc}") from exc

        signed_headers = auth.signed_headers(auth.headers_to_sign(aws_request))
        authorization = (
            f"{SIGV4_ALGORITHM} Credential={auth.scope(aws_request)}, "
            f"SignedHeaders={signed_headers}, Signature={signature}"
        )
        scope = auth.credential_scope(aws_request)
        logger.debug(f"Signed {request.method} request for {request.host} with scope {scope}")
        return SignatureResult(
            authorization=authorization,
            amz_date=aws_request.context["timestamp"],
            credential_scope=scope,
            signed_headers=signed_headers,
            signature=signature,
            canonical_request=canonical_request,
            string_to_sign=string_to_sign,
        )
