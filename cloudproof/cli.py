"""Command line interface for creating and verifying proofs."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from cloudproof import (
    IDENTITY,
    ORGANIZATION,
    APIVariant,
    CloudProofError,
    ProofArtifact,
    ProofOptions,
    ProofVerifier,
    VerificationError,
    VerifyOptions,
    create_proof,
)
from cloudproof.config import load_config

app = typer.Typer(help="CLI for cloudproof identity and organization proofs")

# Command groups
identity_app = typer.Typer(help="Prove and verify an AWS caller identity")
organization_app = typer.Typer(help="Prove and verify an AWS organization")

app.add_typer(identity_app, name="identity")
app.add_typer(organization_app, name="organization")


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", help="Logging level for cloudproof"),
) -> None:
    """cloudproof CLI entry point."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _create(
    variant: APIVariant,
    out: Optional[Path],
    profile: Optional[str],
    user_agent: Optional[str],
    signing_time: Optional[datetime],
) -> None:
    config = load_config()
    if profile:
        config.profile = profile
    if user_agent:
        config.user_agent = user_agent

    options = replace(ProofOptions.from_config(config), signing_time=signing_time)

    try:
        artifact = create_proof(variant, options)
    except CloudProofError as exc:
        typer.secho(f"Failed to create {variant.name} proof: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    payload = json.dumps(artifact.to_dict(), indent=2)
    if out is None:
        typer.echo(payload)
        return
    out.write_text(payload + "\n")
    typer.echo(f"Proof written to {out}")


def _verify(
    variant: APIVariant,
    proof_file: Path,
    endpoint_url: Optional[str],
    timeout: Optional[float],
) -> None:
    try:
        artifact = ProofArtifact.from_json(proof_file.read_text())
    except (OSError, ValidationError) as exc:
        typer.secho(f"Could not read proof from {proof_file}: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    config = load_config()
    if timeout is not None:
        config.transport.timeout = timeout
    options = VerifyOptions.from_config(variant.name, config)
    if endpoint_url:
        options.endpoint_url = endpoint_url

    try:
        record = ProofVerifier(variant, options).verify(artifact)
    except VerificationError as exc:
        typer.secho(
            f"Proof rejected by provider (status {exc.status_code}): {exc.body}",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)
    except CloudProofError as exc:
        typer.secho(f"Failed to verify {variant.name} proof: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    finally:
        if options.transport is not None:
            options.transport.close()

    typer.echo(record.model_dump_json(indent=2))


@identity_app.command("create")
def identity_create(
    out: Optional[Path] = typer.Option(None, help="Write the proof to this file"),
    profile: Optional[str] = typer.Option(None, help="AWS profile to sign with"),
    user_agent: Optional[str] = typer.Option(None, help="User-Agent for the signed request"),
    signing_time: Optional[datetime] = typer.Option(None, help="Override the signing time (UTC)"),
) -> None:
    """
    Sign STS GetCallerIdentity with the ambient AWS credentials.

    Prints the proof as JSON, or writes it to --out.

    Example:
        cloudproof identity create --out proof.json
    """
    _create(IDENTITY, out, profile, user_agent, signing_time)


@identity_app.command("verify")
def identity_verify(
    proof_file: Path,
    endpoint_url: Optional[str] = typer.Option(None, help="Send the proof here instead of STS"),
    timeout: Optional[float] = typer.Option(None, help="Request timeout in seconds"),
) -> None:
    """
    Replay an identity proof against STS and print the verified identity.

    Example:
        cloudproof identity verify proof.json
    """
    _verify(IDENTITY, proof_file, endpoint_url, timeout)


@organization_app.command("create")
def organization_create(
    out: Optional[Path] = typer.Option(None, help="Write the proof to this file"),
    profile: Optional[str] = typer.Option(None, help="AWS profile to sign with"),
    user_agent: Optional[str] = typer.Option(None, help="User-Agent for the signed request"),
    signing_time: Optional[datetime] = typer.Option(None, help="Override the signing time (UTC)"),
) -> None:
    """Sign Organizations DescribeOrganization with the ambient AWS credentials."""
    _create(ORGANIZATION, out, profile, user_agent, signing_time)


@organization_app.command("verify")
def organization_verify(
    proof_file: Path,
    endpoint_url: Optional[str] = typer.Option(
        None, help="Send the proof here instead of AWS Organizations"
    ),
    timeout: Optional[float] = typer.Option(None, help="Request timeout in seconds"),
) -> None:
    """Replay an organization proof and print the verified organization."""
    _verify(ORGANIZATION, proof_file, endpoint_url, timeout)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
