"""Records exchanged between claimant, verifier and provider."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .utils.timestamps import as_utc


class Credentials(BaseModel):
    """AWS credentials as supplied by a credential source. Never persisted."""

    model_config = ConfigDict(frozen=True)

    access_key_id: str
    secret_access_key: str = Field(..., repr=False)
    session_token: Optional[str] = Field(default=None, repr=False)


class ProofArtifact(BaseModel):
    """Portable proof handed from the claimant to the verifier.

    ``signature`` is the complete SigV4 ``Authorization`` header value. It
    names the access key, scope and signed headers, so together with the
    signing time and session token it is all a verifier needs to replay the
    signed request. The artifact never holds the secret key.

    The JSON wire format uses the field names ``signature``, ``time`` and
    ``securityToken``. ``authHeader``, ``security_token`` and
    ``sessionToken`` are accepted on input for interop with other
    implementations.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    signature: str = Field(
        ...,
        validation_alias=AliasChoices("signature", "authHeader"),
        serialization_alias="signature",
        description="SigV4 Authorization header value",
    )
    timestamp: datetime = Field(
        ...,
        validation_alias=AliasChoices("timestamp", "time"),
        serialization_alias="time",
        description="Time the signature was created",
    )
    session_token: str = Field(
        default="",
        validation_alias=AliasChoices(
            "session_token", "securityToken", "security_token", "sessionToken"
        ),
        serialization_alias="securityToken",
        description="Session token bound to the signature",
    )

    @field_validator("timestamp")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @field_validator("session_token", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation as a JSON-compatible dict."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        """Serialize the artifact to its JSON wire format."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> "ProofArtifact":
        """Deserialize an artifact from JSON."""
        return cls.model_validate_json(data)


class Identity(BaseModel):
    """Caller identity attested by STS ``GetCallerIdentity``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    arn: str = Field(..., validation_alias=AliasChoices("arn", "Arn"))
    user_id: str = Field(..., validation_alias=AliasChoices("user_id", "UserId"))
    account: str = Field(..., validation_alias=AliasChoices("account", "Account"))


class AvailablePolicyType(BaseModel):
    """A policy type enabled in the organization root."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: str = Field(..., validation_alias=AliasChoices("status", "Status"))
    type: str = Field(..., validation_alias=AliasChoices("type", "Type"))


class Organization(BaseModel):
    """Organization attested by Organizations ``DescribeOrganization``.

    The provider still calls the management account the "master" account;
    those fields are exposed here as ``main_account_*``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    arn: str = Field(..., validation_alias=AliasChoices("arn", "Arn"))
    id: str = Field(..., validation_alias=AliasChoices("id", "Id"))
    available_policy_types: List[AvailablePolicyType] = Field(
        default_factory=list,
        validation_alias=AliasChoices("available_policy_types", "AvailablePolicyTypes"),
    )
    feature_set: str = Field(
        default="", validation_alias=AliasChoices("feature_set", "FeatureSet")
    )
    main_account_arn: str = Field(
        default="",
        validation_alias=AliasChoices("main_account_arn", "MasterAccountArn"),
    )
    main_account_email: str = Field(
        default="",
        validation_alias=AliasChoices("main_account_email", "MasterAccountEmail"),
    )
    main_account_id: str = Field(
        default="",
        validation_alias=AliasChoices("main_account_id", "MasterAccountId"),
    )

    @field_validator("available_policy_types", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value
