"""Decoders for the provider responses of each API variant."""

from __future__ import annotations

import json
from typing import Optional
from xml.etree import ElementTree

from pydantic import ValidationError

from .contracts import Identity, Organization
from .errors import DecodeError

_IDENTITY_FIELDS = ("Arn", "UserId", "Account")


def _local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on tags."""
    return tag.rsplit("}", 1)[-1]


def _child(parent: ElementTree.Element, name: str) -> Optional[ElementTree.Element]:
    for child in parent:
        if _local_name(child.tag) == name:
            return child
    return None


def decode_identity(body: bytes) -> Identity:
    """Decode a ``GetCallerIdentityResponse`` XML document.

    Raises:
        DecodeError: If the body is not XML or lacks any identity field.
    """
    try:
        root = ElementTree.fromstring(body.strip())
    except ElementTree.ParseError as exc:
        raise DecodeError(f"identity response is not valid XML: {exc}") from exc

    if _local_name(root.tag) == "GetCallerIdentityResult":
        result = root
    else:
        result = _child(root, "GetCallerIdentityResult")
    if result is None:
        raise DecodeError("identity response has no GetCallerIdentityResult element")

    fields = {}
    for name in _IDENTITY_FIELDS:
        element = _child(result, name)
        text = (element.text or "").strip() if element is not None else ""
        if not text:
            raise DecodeError(f"identity response is missing {name}")
        fields[name] = text
    return Identity.model_validate(fields)


def decode_organization(body: bytes) -> Organization:
    """Decode a ``DescribeOrganization`` JSON document.

    Raises:
        DecodeError: If the body is not JSON or the ``Organization`` object is
            missing or incomplete.
    """
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise DecodeError(f"organization response is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict) or not isinstance(payload.get("Organization"), dict):
        raise DecodeError("organization response has no Organization object")

    try:
        return Organization.model_validate(payload["Organization"])
    except ValidationError as exc:
        raise DecodeError(f"organization response is malformed: {exc}") from exc
