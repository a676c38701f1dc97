"""Tests for proof artifact and record models."""

import json
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from cloudproof.contracts import Credentials, Organization, ProofArtifact

SIGNATURE = (
    "AWS4-HMAC-SHA256 Credential=AKID/19700101/us-east-1/sts/aws4_request, "
    "SignedHeaders=content-length;host;x-amz-date;x-amz-security-token, "
    "Signature=" + "0" * 64
)


def test_artifact_wire_format(epoch):
    artifact = ProofArtifact(signature=SIGNATURE, timestamp=epoch, session_token="SESSION")
    wire = json.loads(artifact.to_json())

    assert wire == {
        "signature": SIGNATURE,
        "time": "1970-01-01T00:00:00Z",
        "securityToken": "SESSION",
    }
    assert artifact.to_dict() == wire


def test_artifact_from_json_roundtrip(epoch):
    artifact = ProofArtifact(signature=SIGNATURE, timestamp=epoch, session_token="SESSION")
    assert ProofArtifact.from_json(artifact.to_json()) == artifact


@pytest.mark.parametrize(
    "payload",
    [
        {"authHeader": SIGNATURE, "time": "1970-01-01T00:00:00Z", "securityToken": "T"},
        {"signature": SIGNATURE, "time": "1970-01-01T00:00:00Z", "security_token": "T"},
        {"signature": SIGNATURE, "time": "1970-01-01T00:00:00+00:00", "sessionToken": "T"},
    ],
)
def test_artifact_accepts_interop_field_names(payload, epoch):
    artifact = ProofArtifact.from_json(json.dumps(payload))
    assert artifact.signature == SIGNATURE
    assert artifact.timestamp == epoch
    assert artifact.session_token == "T"


def test_artifact_timestamps_normalized_to_utc():
    naive = ProofArtifact(signature=SIGNATURE, timestamp=datetime(2024, 1, 1, 12, 0))
    offset = ProofArtifact(
        signature=SIGNATURE,
        timestamp=datetime(2024, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2))),
    )
    assert naive.timestamp.tzinfo == timezone.utc
    assert naive.timestamp == offset.timestamp
    assert offset.timestamp.hour == 12


def test_artifact_is_immutable(epoch):
    artifact = ProofArtifact(signature=SIGNATURE, timestamp=epoch)
    assert artifact.session_token == ""
    with pytest.raises(ValidationError):
        artifact.signature = "other"


def test_artifact_requires_signature_and_time():
    with pytest.raises(ValidationError):
        ProofArtifact.from_json('{"time": "1970-01-01T00:00:00Z"}')
    with pytest.raises(ValidationError):
        ProofArtifact.from_json(json.dumps({"signature": SIGNATURE}))


def test_null_security_token_becomes_empty(epoch):
    artifact = ProofArtifact.from_json(
        json.dumps({"signature": SIGNATURE, "time": "1970-01-01T00:00:00Z", "securityToken": None})
    )
    assert artifact.session_token == ""


def test_credentials_repr_hides_secrets():
    creds = Credentials(access_key_id="AKID", secret_access_key="SECRET", session_token="SESSION")
    assert "SECRET" not in repr(creds)
    assert "SESSION" not in repr(creds)
    assert "AKID" in repr(creds)


def test_organization_maps_master_account_fields():
    org = Organization.model_validate(
        {
            "Arn": "arn",
            "Id": "o-1",
            "MasterAccountArn": "acct-arn",
            "MasterAccountEmail": "a@example.com",
            "MasterAccountId": "111",
            "AvailablePolicyTypes": None,
        }
    )
    assert org.main_account_arn == "acct-arn"
    assert org.main_account_email == "a@example.com"
    assert org.main_account_id == "111"
    assert org.available_policy_types == []
